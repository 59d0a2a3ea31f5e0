from .endpoints import DEFAULT_API_URL, file_url, method_url
from .response_utils import parse_envelope, unwrap_envelope

__all__ = ["DEFAULT_API_URL", "file_url", "method_url", "parse_envelope", "unwrap_envelope"]
