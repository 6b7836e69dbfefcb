import asyncio

from brewhook.core.harmonize import harmonize
from brewhook.core.models import InstallOutcome, Manifest


def test_formulas_then_casks_then_taps(make_backend, make_repo):
    backend = make_backend()
    manifest = Manifest(formulas={"jq": "*"}, casks={"firefox": "latest"}, taps=("foo/bar",))

    asyncio.run(harmonize(make_repo(backend), manifest))

    assert backend.ops("install", "tap") == [
        ("install", "formula", "jq", ()),
        ("install", "cask", "firefox", ()),
        ("tap", "foo/bar"),
    ]


def test_one_install_then_one_tap(make_backend, make_repo):
    backend = make_backend()
    manifest = Manifest(formulas={"jq": "*"}, casks={}, taps=("foo/bar",))

    asyncio.run(harmonize(make_repo(backend), manifest))

    assert backend.ops("install", "tap") == [
        ("install", "formula", "jq", ()),
        ("tap", "foo/bar"),
    ]


def test_failures_do_not_stop_later_items(make_backend, make_repo):
    backend = make_backend(install_codes={"jq": 1}, command_codes={"tap": 1})
    manifest = Manifest(formulas={"jq": "*", "wget": "*"}, taps=("foo/bar",))

    report = asyncio.run(harmonize(make_repo(backend), manifest))

    assert backend.ops("install", "tap") == [
        ("install", "formula", "jq", ()),
        ("install", "formula", "wget", ()),
        ("tap", "foo/bar"),
    ]
    assert not report.ok
    assert [r.record.name for r in report.formulas] == ["jq", "wget"]
    assert len(report.failures) == 2


def test_second_run_installs_nothing(make_backend, make_repo):
    backend = make_backend()
    repo = make_repo(backend)
    manifest = Manifest(formulas={"jq": "*"}, casks={"firefox": "*"})

    asyncio.run(harmonize(repo, manifest))
    second = asyncio.run(harmonize(repo, manifest))

    assert backend.count("install") == 2
    assert all(r.outcome is InstallOutcome.ALREADY_INSTALLED for r in second.formulas + second.casks)
    assert second.ok


def test_empty_manifest_does_nothing(make_backend, make_repo):
    backend = make_backend()

    report = asyncio.run(harmonize(make_repo(backend), Manifest()))

    assert report.ok
    assert backend.ops("install", "tap") == []
