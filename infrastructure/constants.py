from pathlib import Path

# Repo-root conventional directories/files (overrideable on the command line)
CONFIG_DIR = Path("configs")
EDITOR_CONFIG_FILE = CONFIG_DIR / "editor.yaml"
IDENTITY_FILE = CONFIG_DIR / "identity.json"

# Environment overrides applied on top of editor.yaml
ENV_API_URL = "USER_EDITOR_API_URL"
ENV_API_TOKEN = "USER_EDITOR_API_TOKEN"
