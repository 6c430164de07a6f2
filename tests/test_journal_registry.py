import pytest

from journaling.errors import ConfigurationError
from journaling.models.journal import WorkPackageJournal
from journaling.models.work_package import WorkPackage
from journaling.services.journal_registry import JournableDescriptor, JournableRegistry, registry


def test_default_journables_are_registered():
    assert registry.journable_types() == ["Meeting", "WorkPackage"]
    descriptor = registry.descriptor_for_route("work_packages")
    assert descriptor.journable_type == "WorkPackage"
    assert descriptor.id_attribute == "work_package_id"
    assert "id" not in descriptor.journaled_columns
    assert "subject" in descriptor.journaled_columns
    assert "lock_version" not in descriptor.journaled_columns


def test_descriptor_lookup_by_instance():
    wp = WorkPackage(subject="x", author_id=1)
    assert registry.descriptor_for(wp).data_type == "WorkPackageJournal"


def test_unknown_type_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        registry.descriptor_for("Wiki")
    with pytest.raises(ConfigurationError):
        registry.descriptor_for_route("wikis")


def test_missing_timestamp_attribute_is_rejected():
    custom = JournableRegistry()
    with pytest.raises(ConfigurationError):
        custom.register(
            JournableDescriptor(
                journable_type="WorkPackage",
                model=WorkPackage,
                data_model=WorkPackageJournal,
                route_key="work_packages",
                timestamp_attribute="updated_on",
            )
        )
    assert custom.journable_types() == []


def test_touch_attributes_override_timestamp_columns():
    descriptor = JournableDescriptor(
        journable_type="WorkPackage",
        model=WorkPackage,
        data_model=WorkPackageJournal,
        route_key="work_packages",
        touch_attributes=("updated_at",),
    )
    assert descriptor.timestamp_columns == ("updated_at",)
    custom = JournableRegistry()
    custom.register(descriptor)
    custom.unregister("WorkPackage")
    assert custom.journable_types() == []
