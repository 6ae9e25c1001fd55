"""Project-wide constants."""

# -- Transport defaults -----------------------------------------------------
DEFAULT_TIMEOUT: float = 30.0
DEFAULT_MAX_RETRIES: int = 5
DEFAULT_INITIAL_DELAY: float = 0.2  # seconds
BACKOFF_JITTER_RATIO: float = 0.25
MIN_BACKOFF_SECONDS: float = 0.1

# -- PubMed / NCBI ----------------------------------------------------------
NCBI_BASE_URL: str = "https://eutils.ncbi.nlm.nih.gov/entrez/eutils"
PUBMED_SEARCH_URL: str = f"{NCBI_BASE_URL}/esearch.fcgi"
PUBMED_FETCH_URL: str = f"{NCBI_BASE_URL}/efetch.fcgi"

DEFAULT_EMAIL: str = "your_email@example.com"
DEFAULT_TOP_K_RESULTS: int = 3
DEFAULT_MAX_QUERY_LENGTH: int = 300
DEFAULT_DOC_CONTENT_CHARS_MAX: int = 2000

# -- Sentinels --------------------------------------------------------------
NO_ABSTRACT_AVAILABLE: str = "No abstract available"
NO_RESULTS_FOUND: str = "No good PubMed Result was found"
EXCEPTION_PREFIX: str = "PubMed exception: "
