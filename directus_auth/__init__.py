"""
Directus credential manager.

Other command-line tools embed this package to reuse saved Directus
credentials instead of asking for a URL and token every time:

    from directus_auth import get_active, prompt_for_credentials

    creds = get_active() or prompt_for_credentials()
    print(creds.url, creds.token)
"""

__version__ = "1.0.0"

from directus_auth.embed import (  # noqa: E402
    CredentialSelection,
    get_active,
    get_by_name,
    list_saved,
    prompt_for_credentials,
)
from directus_auth.errors import DirectusAuthError, NoCredentialsError  # noqa: E402
from directus_auth.models import Credentials, UserInfo, ValidationResult  # noqa: E402
from directus_auth.store import CredentialStore, default_store  # noqa: E402
from directus_auth.validator import validate_all_credentials, validate_credentials  # noqa: E402

__all__ = [
    "__version__",
    "CredentialSelection",
    "CredentialStore",
    "Credentials",
    "DirectusAuthError",
    "NoCredentialsError",
    "UserInfo",
    "ValidationResult",
    "default_store",
    "get_active",
    "get_by_name",
    "list_saved",
    "prompt_for_credentials",
    "validate_all_credentials",
    "validate_credentials",
]
