"""
Format checks shared by the redirect handler and the API schemas.
"""

import re

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

CODE_PATTERN = r"^[A-Za-z0-9]{6,8}$"
CODE_MIN_LENGTH = 6
CODE_MAX_LENGTH = 8

_code_re = re.compile(CODE_PATTERN)
_url_adapter = TypeAdapter(AnyHttpUrl)


def is_valid_code(code: str) -> bool:
    """Check that a code is 6-8 ASCII letters or digits"""
    return bool(_code_re.fullmatch(code))


def is_valid_url(url: str) -> bool:
    """
    Check that a string is an absolute http(s) URL with a host.

    Only validates; callers keep their original string so the stored
    redirect target is exactly what was submitted.
    """
    if not url or url != url.strip():
        return False
    try:
        _url_adapter.validate_python(url)
    except ValidationError:
        return False
    return True
