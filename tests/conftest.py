"""
Shared test configuration
"""

import os

# Settings are instantiated at import time and require the webhook secret
os.environ.setdefault("GITHUB_WEBHOOK_SECRET", "test-secret")
