"""pubmed-retriever: search PubMed and normalise article metadata."""

__version__ = "0.1.0"
