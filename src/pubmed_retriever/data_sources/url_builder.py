"""URL construction for the NCBI E-utilities esearch and efetch endpoints."""

from urllib.parse import urlencode

from pubmed_retriever.constants import PUBMED_FETCH_URL, PUBMED_SEARCH_URL


class PubMedURLBuilder:
    """Builds esearch/efetch URLs carrying the contact email and optional API key."""

    SEARCH_URL = PUBMED_SEARCH_URL
    FETCH_URL = PUBMED_FETCH_URL

    def __init__(self, email: str, api_key: str = "") -> None:
        self.email = email
        self.api_key = api_key

    def _credentials(self) -> dict[str, str]:
        # api_key is left out entirely rather than sent empty
        params = {"email": self.email}
        if self.api_key:
            params["api_key"] = self.api_key
        return params

    def build_search_url(self, query: str, max_results: int) -> str:
        """esearch URL returning JSON with a history-server webenv."""
        params = {
            "db": "pubmed",
            "term": query,
            "retmode": "json",
            "retmax": max_results,
            "usehistory": "y",
            **self._credentials(),
        }
        return f"{self.SEARCH_URL}?{urlencode(params)}"

    def build_fetch_url(self, uid: str, webenv: str) -> str:
        """efetch URL returning the XML record for a single identifier."""
        params = {
            "db": "pubmed",
            "retmode": "xml",
            "id": uid,
            "webenv": webenv,
            **self._credentials(),
        }
        return f"{self.FETCH_URL}?{urlencode(params)}"
