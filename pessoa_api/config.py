import os

from dotenv import load_dotenv
from opensearchpy import OpenSearch

load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    OPENSEARCH_HOST: str = os.getenv("OPENSEARCH_HOST", "localhost")
    OPENSEARCH_PORT: int = int(os.getenv("OPENSEARCH_PORT", "9200"))
    OPENSEARCH_INDEX: str = os.getenv("OPENSEARCH_INDEX", "pessoa")
    OPENSEARCH_USE_SSL: bool = os.getenv("OPENSEARCH_USE_SSL", "false").lower() == "true"
    OPENSEARCH_VERIFY_CERTS: bool = os.getenv("OPENSEARCH_VERIFY_CERTS", "true").lower() == "true"
    OPENSEARCH_USER: str | None = os.getenv("OPENSEARCH_USER")
    OPENSEARCH_PASSWORD: str | None = os.getenv("OPENSEARCH_PASSWORD")

    # "opensearch" or "memory"
    STORAGE_BACKEND: str = os.getenv("STORAGE_BACKEND", "opensearch").lower()

    APPLICATION_NAME: str = os.getenv("APPLICATION_NAME", "elfotecApp")
    ENABLE_TRANSLATION: bool = os.getenv("ENABLE_TRANSLATION", "false").lower() == "true"

    API_ROOT_PATH: str = os.getenv("API_ROOT_PATH", "")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()


def get_opensearch_client() -> OpenSearch:
    """
    Create and return an OpenSearch client instance.

    Returns:
        OpenSearch: Configured OpenSearch client
    """
    http_auth = None
    if Config.OPENSEARCH_USER and Config.OPENSEARCH_PASSWORD:
        http_auth = (Config.OPENSEARCH_USER, Config.OPENSEARCH_PASSWORD)

    return OpenSearch(
        hosts=[{"host": Config.OPENSEARCH_HOST, "port": Config.OPENSEARCH_PORT}],
        use_ssl=Config.OPENSEARCH_USE_SSL,
        verify_certs=Config.OPENSEARCH_VERIFY_CERTS,
        ssl_show_warn=False,
        http_auth=http_auth,
    )


# Global client instance (reused across requests)
opensearch_client = get_opensearch_client()
index_name = Config.OPENSEARCH_INDEX
sequence_index_name = f"{index_name}_sequence"
