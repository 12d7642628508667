"""
Configuration constants for the certification question bank importer.
"""

import os
from pathlib import Path

# Load .env file if present
from dotenv import load_dotenv
load_dotenv()

# Directory paths
PROJECT_ROOT = Path(__file__).parent
OUTPUT_DIR = PROJECT_ROOT / "output"
DATABASE_PATH = Path(
    os.environ.get("QBANK_DATABASE_PATH", str(OUTPUT_DIR / "certification_questions.db"))
)

# Input files accepted by the importer
QUESTION_FILE_EXTENSION = ".json"

# Print a progress line every N processed records
PROGRESS_EVERY = 10

# ============================================================================
# CLASSIFICATION TAXONOMY
# ============================================================================

# Providers (closed set)
PROVIDERS = [
    "AWS",
    "GCP",
    "Azure",
    "Oracle",
    "Salesforce",
    "ML",
    "DevOps",
    "General",
]

# Categories (15 + General), in rule declaration order
CATEGORIES = [
    "Data Processing",
    "Data Storage",
    "Data Pipeline",
    "Machine Learning",
    "Analytics & BI",
    "Database",
    "Compute",
    "Security & Identity",
    "Networking",
    "Monitoring & Operations",
    "Storage",
    "Serverless",
    "DevOps & CI/CD",
    "Data Migration",
    "Cost Optimization",
    "General",
]

DIFFICULTIES = ["easy", "medium", "hard"]

DEFAULT_LABEL = "General"

# Difficulty thresholds (question text length in characters)
HARD_TEXT_LENGTH = 500
EASY_TEXT_LENGTH = 150
HARD_OPTION_COUNT = 6

HARD_KEYWORDS = ["advanced", "complex", "optimize", "troubleshoot"]
EASY_KEYWORDS = ["basic", "simple", "what is", "which of"]
