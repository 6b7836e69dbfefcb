import pytest

from brewhook.core.errors import ManifestError
from brewhook.core.models import (
    InstallOutcome,
    InstallResult,
    LookupStatus,
    Manifest,
    PackageKind,
    PackageRecord,
    TapResult,
)


def test_manifest_from_document():
    manifest = Manifest.from_document(
        {"system": {"brew": {"formulas": {"jq": "*", "wget": "1.24"}, "taps": ["foo/bar"]}}}
    )

    assert list(manifest.formulas) == ["jq", "wget"]
    assert manifest.casks == {}
    assert manifest.taps == ("foo/bar",)


@pytest.mark.parametrize("document", [None, {}, {"system": {}}, {"system": {"brew": None}}])
def test_manifest_missing_sections_are_empty(document):
    assert Manifest.from_document(document) == Manifest()


@pytest.mark.parametrize(
    ("document", "section"),
    [
        ({"system": "brew"}, "system"),
        ({"system": {"brew": ["jq"]}}, "system.brew"),
        ({"system": {"brew": {"casks": ["firefox"]}}}, "system.brew.casks"),
        ({"system": {"brew": {"taps": "foo/bar"}}}, "system.brew.taps"),
    ],
)
def test_manifest_wrong_types_raise(document, section):
    with pytest.raises(ManifestError) as exc:
        Manifest.from_document(document)

    assert exc.value.context["section"] == section


def test_unresolved_record_has_no_dependencies():
    record = PackageRecord.unresolved("jq", PackageKind.FORMULA, installed=True)

    assert record.version == "unknown"
    assert record.lookup is LookupStatus.DEGRADED
    assert "dependencies" not in record.to_dict()


def test_install_result_success_follows_outcome():
    record = PackageRecord("jq", "1.7", True, PackageKind.FORMULA, ())

    assert InstallResult(record, InstallOutcome.ALREADY_INSTALLED).success
    assert InstallResult(record, InstallOutcome.INSTALLED, 0).success
    assert not InstallResult(record, InstallOutcome.FAILED, 1).success


def test_records_are_immutable():
    record = PackageRecord("jq", "1.7", True, PackageKind.FORMULA, ())

    with pytest.raises(AttributeError):
        record.version = "1.8"


def test_tap_result_to_dict():
    assert TapResult("foo/bar", "untap", False).to_dict() == {
        "type": "untap",
        "tap": "foo/bar",
        "success": False,
    }
