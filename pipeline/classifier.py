"""
Rule-based classification of certification questions.

Every extractor walks an ordered rule table and returns the label of the
first rule that matches. Table order is significant: several patterns
overlap (e.g. "dataflow" is both Data Processing and Data Pipeline) and the
earlier entry always wins.
"""

import re
from pathlib import Path
from typing import List, Sequence, Tuple

from config import (
    DEFAULT_LABEL,
    HARD_KEYWORDS,
    EASY_KEYWORDS,
    HARD_TEXT_LENGTH,
    EASY_TEXT_LENGTH,
    HARD_OPTION_COUNT,
)
from .models import Classification


# =============================================================================
# Rule tables
# =============================================================================

# (label, substrings) - checked against the normalized source filename
PROVIDER_FILENAME_RULES: List[Tuple[str, Tuple[str, ...]]] = [
    ("GCP", ("google cloud", "gcp")),
    ("AWS", ("aws", "amazon")),
    ("Azure", ("azure", "microsoft")),
    ("Oracle", ("oracle", "oci")),
    ("Salesforce", ("salesforce",)),
]

# (label, substrings) - checked against the question text
PROVIDER_CONTENT_RULES: List[Tuple[str, Tuple[str, ...]]] = [
    ("ML", ("tensorflow", "neural", "machine learning")),
    ("AWS", ("aws", "amazon", "ec2", "s3", "dynamodb", "lambda")),
    ("GCP", ("google cloud", "gcp", "gke", "bigquery", "data studio")),
    ("Azure", ("azure", "microsoft", "azure functions")),
    ("DevOps", ("kubernetes", "docker", "container")),
]

# (filename phrase, certification code)
CERTIFICATION_FILENAME_RULES: List[Tuple[str, str]] = [
    ("professional data engineer", "PDE"),
    ("professional cloud architect", "PCA"),
    ("associate cloud engineer", "ACE"),
    ("professional cloud developer", "PCD"),
    ("professional cloud security engineer", "PCSE"),
    ("professional cloud network engineer", "PCNE"),
    ("professional cloud devops engineer", "PCDE"),
    ("professional machine learning engineer", "PMLE"),
    ("solutions architect associate", "SAA-C03"),
    ("solutions architect professional", "SAP-C02"),
    ("developer associate", "DVA-C02"),
    ("sysops administrator", "SOA-C02"),
    ("devops engineer professional", "DOP-C02"),
    ("security specialty", "SCS-C02"),
    ("machine learning specialty", "MLS-C01"),
    ("data analytics specialty", "DAS-C01"),
    ("database specialty", "DBS-C01"),
    ("advanced networking specialty", "ANS-C01"),
    ("azure fundamentals", "AZ-900"),
    ("azure administrator", "AZ-104"),
    ("azure developer", "AZ-204"),
    ("azure solutions architect expert", "AZ-305"),
    ("azure devops engineer expert", "AZ-400"),
    ("azure security engineer", "AZ-500"),
    ("azure data engineer", "DP-203"),
    ("azure data scientist", "DP-100"),
    ("azure ai engineer", "AI-102"),
    ("certified kubernetes administrator", "CKA"),
    ("certified kubernetes application developer", "CKAD"),
    ("certified kubernetes security specialist", "CKS"),
]

# NOTE: short alternatives such as "ace" and "ai" match inside longer words
# ("interface", "explain"). Kept as-is so existing rows classify the same.
CERTIFICATION_CONTENT_RULES: List[Tuple[str, "re.Pattern"]] = [
    ("SAA-C03", re.compile(r"solutions architect associate|saa.c03", re.I)),
    ("SAA-C02", re.compile(r"solutions architect associate|saa.c02", re.I)),
    ("DVA-C01", re.compile(r"developer associate|dva.c01", re.I)),
    ("SOA-C02", re.compile(r"sysops administrator|soa.c02", re.I)),
    ("PDE", re.compile(r"professional data engineer|bigquery|dataflow|pub/sub", re.I)),
    ("PCA", re.compile(r"professional cloud architect|gcp architect", re.I)),
    ("ACE", re.compile(r"associate cloud engineer|ace", re.I)),
    ("AZ-900", re.compile(r"azure fundamentals|az.900", re.I)),
    ("AZ-104", re.compile(r"azure administrator|az.104", re.I)),
    ("AZ-204", re.compile(r"azure developer|az.204", re.I)),
    ("CKA", re.compile(r"certified kubernetes administrator|cka", re.I)),
    ("CKAD", re.compile(r"certified kubernetes application developer|ckad", re.I)),
    ("ML-Specialty", re.compile(r"machine learning|tensorflow|neural.network|ai", re.I)),
]

CATEGORY_RULES: List[Tuple[str, "re.Pattern"]] = [
    ("Data Processing", re.compile(
        r"bigquery|dataflow|dataproc|apache beam|spark|hadoop|etl|batch processing|stream processing",
        re.I)),
    ("Data Storage", re.compile(
        r"cloud storage|bigtable|firestore|cloud sql|spanner|data lake|warehouse", re.I)),
    ("Data Pipeline", re.compile(
        r"pub/sub|dataflow|cloud composer|airflow|pipeline|orchestration|workflow", re.I)),
    ("Machine Learning", re.compile(
        r"tensorflow|ai platform|automl|vertex ai|ml|neural.network|model|training|prediction",
        re.I)),
    ("Analytics & BI", re.compile(
        r"data studio|looker|analytics|reporting|visualization|dashboard|bi", re.I)),
    ("Database", re.compile(
        r"database|sql|nosql|bigtable|spanner|firestore|cloud sql|mysql|postgresql", re.I)),
    ("Compute", re.compile(
        r"compute engine|gke|kubernetes|app engine|cloud functions|cloud run|containers", re.I)),
    ("Security & Identity", re.compile(
        r"iam|security|encryption|kms|service account|authentication|authorization", re.I)),
    ("Networking", re.compile(
        r"vpc|network|subnet|firewall|load balancer|dns|cdn|interconnect", re.I)),
    ("Monitoring & Operations", re.compile(
        r"stackdriver|cloud monitoring|logging|alerting|debugging|profiler", re.I)),
    ("Storage", re.compile(
        r"cloud storage|persistent disk|filestore|archive|backup", re.I)),
    ("Serverless", re.compile(
        r"cloud functions|cloud run|app engine|serverless|event driven", re.I)),
    ("DevOps & CI/CD", re.compile(
        r"cloud build|container registry|deployment|ci/cd|source repositories", re.I)),
    ("Data Migration", re.compile(
        r"database migration service|transfer|import|export|migration", re.I)),
    ("Cost Optimization", re.compile(
        r"billing|cost|pricing|budget|optimization|resource management", re.I)),
]

TAG_RULES: List[Tuple[str, "re.Pattern"]] = [
    ("tensorflow", re.compile(r"tensorflow", re.I)),
    ("neural-networks", re.compile(r"neural.network", re.I)),
    ("overfitting", re.compile(r"overfitting|overfit", re.I)),
    ("regularization", re.compile(r"dropout|regularization", re.I)),
    ("machine-learning", re.compile(r"machine.learning|ml", re.I)),
    ("aws-ec2", re.compile(r"ec2|elastic.compute", re.I)),
    ("aws-s3", re.compile(r"s3|simple.storage", re.I)),
    ("aws-lambda", re.compile(r"lambda|serverless", re.I)),
    ("kubernetes", re.compile(r"kubernetes|k8s", re.I)),
    ("docker", re.compile(r"docker|container", re.I)),
    ("security", re.compile(r"security|encryption|auth", re.I)),
    ("networking", re.compile(r"network|vpc|subnet", re.I)),
    ("database", re.compile(r"database|sql|nosql", re.I)),
    ("monitoring", re.compile(r"monitoring|logging|metrics", re.I)),
    ("performance", re.compile(r"performance|optimization|scaling", re.I)),
]

_FILENAME_SEPARATORS = re.compile(r"[-_.\s]+")


# =============================================================================
# Extractors
# =============================================================================

def normalize_filename(filename: str) -> str:
    """Lowercase a source filename and turn separators into single spaces.

    ``"AWS-Developer-Associate.json"`` becomes ``"aws developer associate"``.
    """
    if not filename:
        return ""
    stem = Path(filename).stem if filename.lower().endswith(".json") else filename
    return _FILENAME_SEPARATORS.sub(" ", stem.lower()).strip()


def _first_substring_match(haystack: str, rules) -> str:
    for label, needles in rules:
        if any(needle in haystack for needle in needles):
            return label
    return ""


def extract_provider(question_text: str, filename: str = "") -> str:
    """Provider from the filename first, then from the question text."""
    provider = _first_substring_match(normalize_filename(filename), PROVIDER_FILENAME_RULES)
    if provider:
        return provider
    provider = _first_substring_match(question_text.lower(), PROVIDER_CONTENT_RULES)
    return provider or DEFAULT_LABEL


def extract_certification(question_text: str, filename: str = "") -> str:
    """Exam code from the filename phrase table, then the content regex table."""
    file = normalize_filename(filename)
    for phrase, cert in CERTIFICATION_FILENAME_RULES:
        if phrase in file:
            return cert

    for cert, pattern in CERTIFICATION_CONTENT_RULES:
        if pattern.search(question_text):
            return cert

    return DEFAULT_LABEL


def extract_category(question_text: str) -> str:
    for category, pattern in CATEGORY_RULES:
        if pattern.search(question_text):
            return category
    return DEFAULT_LABEL


def extract_difficulty(question_text: str, options: Sequence) -> str:
    """
    Difficulty from keywords, option count and text length.

    The hard predicate is evaluated first, so a long question that also
    says "what is" is still hard.
    """
    text = question_text.lower()

    if (any(keyword in text for keyword in HARD_KEYWORDS)
            or len(options) > HARD_OPTION_COUNT
            or len(text) > HARD_TEXT_LENGTH):
        return "hard"

    if (any(keyword in text for keyword in EASY_KEYWORDS)
            or len(text) < EASY_TEXT_LENGTH):
        return "easy"

    return "medium"


def extract_tags(question_text: str) -> List[str]:
    """All matching tags, in rule declaration order."""
    return [tag for tag, pattern in TAG_RULES if pattern.search(question_text)]


def classify(question_text: str, filename: str, options: Sequence) -> Classification:
    return Classification(
        provider=extract_provider(question_text, filename),
        certification=extract_certification(question_text, filename),
        category=extract_category(question_text),
        difficulty=extract_difficulty(question_text, options),
        tags=tuple(extract_tags(question_text)),
    )
