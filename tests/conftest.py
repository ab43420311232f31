import pytest


CONFIG_VARIABLES = (
    "AUTO_COMMIT_PREFIX",
    "AUTO_GENERATE_MESSAGES",
    "PUSH",
    "REMOTE",
    "BRANCH",
    "COMMIT_MESSAGE",
    "PRODUCT_NAME",
    "SQUASH_ON_EXIT",
)


@pytest.fixture(autouse=True)
def isolate_config_environment(monkeypatch):
    """Remove auto-commit settings inherited from the developer's shell.

    Tests that need a setting set it explicitly with ``monkeypatch.setenv``.
    """
    for name in CONFIG_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    yield
