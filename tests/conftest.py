import pytest

FEE_ENV_VARS = (
    "STRIPE_PLATFORM_FEE_PERCENTAGE",
    "STRIPE_PLATFORM_FEE_CAP",
    "STRIPE_PLATFORM_FEE_MINIMUM",
    "STRIPE_CURRENCY",
)


@pytest.fixture(autouse=True)
def clean_fee_env(monkeypatch, tmp_path):
    for name in FEE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # keep a developer's .env out of the settings under test
    monkeypatch.chdir(tmp_path)
