import pytest
from prometheus_client import CollectorRegistry, Gauge

from lyf_exporter.monitoring.metrics import RegistrationError, register_metrics
from lyf_exporter.upstream.models import KittyResponse


def _response(contributions, collected, first_name="John"):
    return KittyResponse.model_validate(
        {
            "kitty": {
                "id": "1",
                "ownerId": "1",
                "ownerFirstName": first_name,
                "ownerLastName": "Doe",
                "contributionsCounter": contributions,
                "totalCollectedAmount": collected,
            },
            "available": 1,
        }
    )


def test_register_metrics_creates_both_gauges(metrics):
    assert isinstance(metrics.contributions_counter, Gauge)
    assert isinstance(metrics.total_collected_amount, Gauge)


def test_register_metrics_twice_fails():
    registry = CollectorRegistry()
    register_metrics(registry)

    with pytest.raises(RegistrationError, match="lyf_contributions_counter"):
        register_metrics(registry)


def test_register_metrics_rolls_back_partial_registration():
    registry = CollectorRegistry()
    Gauge("lyf_total_collected_amount", "already taken", registry=registry)

    with pytest.raises(RegistrationError, match="lyf_total_collected_amount"):
        register_metrics(registry)

    # The first gauge must not linger in the registry.
    Gauge("lyf_contributions_counter", "free again", registry=registry)


def test_publish_overwrites_previous_values(metrics, john_labels):
    metrics.publish(_response(1, 100))
    metrics.publish(_response(3, 250))

    registry = metrics.registry
    assert registry.get_sample_value("lyf_contributions_counter", john_labels) == 3.0
    assert registry.get_sample_value("lyf_total_collected_amount", john_labels) == 250.0


def test_publish_keeps_other_label_sets(metrics, john_labels):
    metrics.publish(_response(1, 100))
    metrics.publish(_response(7, 700, first_name="Jane"))

    jane_labels = dict(john_labels, OwnerFirstName="Jane")
    registry = metrics.registry
    assert registry.get_sample_value("lyf_contributions_counter", john_labels) == 1.0
    assert registry.get_sample_value("lyf_contributions_counter", jane_labels) == 7.0


def test_publish_empty_record_uses_empty_labels(metrics):
    metrics.publish(KittyResponse())

    empty = {"OwnerFirstName": "", "OwnerLastName": "", "OwnerID": "", "ID": ""}
    assert metrics.registry.get_sample_value("lyf_contributions_counter", empty) == 0.0


def test_register_metrics_adds_runtime_collectors(metrics):
    names = {family.name for family in metrics.registry.collect()}

    assert "python_info" in names


def test_register_metrics_can_skip_runtime_collectors():
    registry = CollectorRegistry()
    register_metrics(registry, runtime_metrics=False)

    names = {family.name for family in registry.collect()}

    assert names == {"lyf_contributions_counter", "lyf_total_collected_amount"}
