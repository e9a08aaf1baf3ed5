import os

import pytest
from prometheus_client import CollectorRegistry

from lyf_exporter.monitoring.metrics import register_metrics

OK_BODY = (
    '{ "kitty": { "id": "1", "ownerId": "1", "ownerFirstName": "John", "ownerLastName": "Doe",'
    ' "contributionsCounter": 1, "totalCollectedAmount": 100 }, "available": 1 }'
)

JOHN_LABELS = {"OwnerFirstName": "John", "OwnerLastName": "Doe", "OwnerID": "1", "ID": "1"}


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every test without LYF_* variables and away from any local .env."""

    for name in list(os.environ):
        if name.upper().startswith("LYF_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def metrics():
    return register_metrics(CollectorRegistry())


@pytest.fixture
def ok_body():
    return OK_BODY


@pytest.fixture
def john_labels():
    return dict(JOHN_LABELS)
