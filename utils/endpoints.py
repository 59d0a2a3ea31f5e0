"""Bot API URL templates.

Method calls go to `<base>/bot<token>/<method>`, file downloads to
`<base>/file/bot<token>/<file_path>`.
"""

DEFAULT_API_URL = "https://api.telegram.org"


def method_url(base_url: str, token: str, method: str) -> str:
    return f"{base_url.rstrip('/')}/bot{token}/{method}"


def file_url(base_url: str, token: str, file_path: str) -> str:
    return f"{base_url.rstrip('/')}/file/bot{token}/{file_path.lstrip('/')}"
