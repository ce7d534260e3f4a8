"""Built-in catalog — secret signatures, allowlist, and path exclusions.

Secret pattern order is significant: the first pattern that qualifies on a
line decides the category reported for it.
"""

from leakgate.catalog.models import (
    AllowlistPattern,
    ConfidenceClass,
    ExcludePathRule,
    SecretPattern,
)

HIGH = ConfidenceClass.ALWAYS_HIGH
GATED = ConfidenceClass.ENTROPY_GATED

BUILTIN_SECRET_PATTERNS = (
    # Vendor API keys
    SecretPattern("STRIPE_LIVE_SECRET_KEY", "Stripe live secret key", r"sk_live_[a-zA-Z0-9]{24,}", HIGH),
    SecretPattern("STRIPE_TEST_SECRET_KEY", "Stripe test secret key", r"sk_test_[a-zA-Z0-9]{24,}", HIGH),
    SecretPattern("STRIPE_LIVE_PUBLISHABLE_KEY", "Stripe live publishable key", r"pk_live_[a-zA-Z0-9]{24,}", GATED),
    SecretPattern("STRIPE_TEST_PUBLISHABLE_KEY", "Stripe test publishable key", r"pk_test_[a-zA-Z0-9]{24,}", GATED),
    SecretPattern("GOOGLE_API_KEY", "Google API key", r"AIza[0-9A-Za-z_-]{35}", HIGH),
    SecretPattern("AWS_ACCESS_KEY", "AWS token", r"AKIA[0-9A-Z]{16}", HIGH),
    SecretPattern("OPENAI_STYLE_KEY", "OpenAI-style secret key", r"sk-[a-zA-Z0-9]{32,}", GATED),
    SecretPattern(
        "SLACK_TOKEN",
        "Slack token",
        r"xox[baprs]-[0-9]{10,13}-[0-9]{10,13}-[a-zA-Z0-9]{24,}",
        HIGH,
    ),
    # GitHub (personal, OAuth, user-to-server, server-to-server, refresh)
    SecretPattern("GITHUB_TOKEN", "GitHub token", r"gh[pousr]_[a-zA-Z0-9]{36}", HIGH),
    # AWS temporary credentials
    SecretPattern("AWS_SESSION_KEY", "AWS token", r"ASIA[0-9A-Z]{16}", HIGH),
    SecretPattern("GENERIC_HIGH_ENTROPY", "Generic high-entropy string", r"[a-zA-Z0-9+/=]{40,}", GATED),
    SecretPattern(
        "JWT",
        "JSON Web Token",
        r"eyJ[a-zA-Z0-9_-]{10,}\.[a-zA-Z0-9_-]{10,}\.[a-zA-Z0-9_-]{10,}",
        GATED,
    ),
    SecretPattern(
        "PRIVATE_KEY",
        "Private key block",
        r"-----BEGIN (RSA |EC |DSA |OPENSSH )?PRIVATE KEY-----",
        HIGH,
    ),
    # Google OAuth
    SecretPattern("GOOGLE_OAUTH_ACCESS_TOKEN", "Google OAuth access token", r"ya29\.[a-zA-Z0-9_-]+", GATED),
    SecretPattern("GOOGLE_OAUTH_REFRESH_TOKEN", "Google OAuth refresh token", r"1//[a-zA-Z0-9_-]+", GATED),
)

BUILTIN_ALLOWLIST = tuple(
    AllowlistPattern(p)
    for p in (
        # Placeholder values
        r"YOUR_API_KEY_HERE",
        r"your-api-key-here",
        r"example\.com",
        r"test_key",
        r"demo_key",
        r"placeholder",
        r"CHANGE_ME",
        r"REPLACE_ME",
        # Variable names, not values
        r"api_key\s*=",
        r"API_KEY\s*=",
        r"access_token\s*=",
        r"secret\s*=",
        # URLs and endpoints
        r"https?://[a-zA-Z0-9.-]+",
        r"api/v[0-9]+",
        r"/api/",
        # Comments that merely mention credentials
        r"^\s*#.*(api|key|token|secret)",
        r"^\s*//.*(api|key|token|secret)",
        r"^\s*\*.*(api|key|token|secret)",
        # References to test, mock and example files
        r"test.*\.(py|js|sh)$",
        r".*test\.(py|js|sh)$",
        r"mock.*\.(py|js|sh)$",
        r"\.example$",
        r"\.sample$",
        r"example\.",
        # Explicit opt-out marker
        r"leakgate-ignore",
    )
)

BUILTIN_EXCLUDE_PATHS = tuple(
    ExcludePathRule(p)
    for p in (
        r"\.git/",
        r"\.env\.example$",
        r"\.gitignore$",
        r"artifacts/",
        r"\.pre-commit-cache/",
        r"node_modules/",
        r"\.venv/",
        r"venv/",
        r"__pycache__/",
        r"\.pytest_cache/",
        r"\.mypy_cache/",
        r"dist/",
        r"build/",
    )
)

__all__ = ["BUILTIN_ALLOWLIST", "BUILTIN_EXCLUDE_PATHS", "BUILTIN_SECRET_PATTERNS"]
