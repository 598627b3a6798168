"""
Tests for domain models — profiles, command specs, receipts.
"""

import pydantic
import pytest

from pmprofiler.core.models import (
    BerryFeatureFlags,
    CommandSpec,
    ManagerKind,
    ManagerProfile,
    Receipt,
    YarnrcConfig,
)


class TestManagerProfile:
    def test_label(self):
        assert ManagerProfile(kind="pnpm", major_version=8).label == "pnpm8"

    def test_is_berry(self):
        assert ManagerProfile(kind=ManagerKind.YARN, major_version=2).is_berry
        assert not ManagerProfile(kind=ManagerKind.YARN, major_version=1).is_berry
        assert not ManagerProfile(kind=ManagerKind.NPM, major_version=8).is_berry

    def test_frozen(self):
        profile = ManagerProfile(kind=ManagerKind.NPM, major_version=6)
        with pytest.raises(pydantic.ValidationError):
            profile.major_version = 8

    def test_unknown_kind(self):
        with pytest.raises(pydantic.ValidationError):
            ManagerProfile(kind="bun", major_version=1)


class TestBerryFeatureFlags:
    def test_safe_defaults(self):
        flags = BerryFeatureFlags(major_version=3)
        assert flags.disable_scripts
        assert not flags.skip_build


class TestCommandSpec:
    def test_display_prefers_fingerprint(self):
        assert CommandSpec(command="yarn add x --token t", fingerprint="yarn add x").display == "yarn add x"
        assert CommandSpec(command="yarn install").display == "yarn install"

    def test_coerce(self):
        spec = CommandSpec(command="a")
        assert CommandSpec.coerce(spec) is spec
        assert CommandSpec.coerce("b") == CommandSpec(command="b")
        assert CommandSpec.coerce(("c", "fp")) == CommandSpec(command="c", fingerprint="fp")


class TestReceipt:
    def test_success(self):
        r = Receipt.success(adapter="shell", command="yarn --version", output="3.6.4")
        assert r.ok
        assert not r.failed
        assert r.return_code == 0

    def test_failure(self):
        r = Receipt.failure(adapter="shell", command="yarn up", error="boom", return_code=1)
        assert r.failed
        assert r.error == "boom"
        assert r.return_code == 1


class TestYarnrcConfig:
    def test_fetch_default(self):
        assert YarnrcConfig().fetch("nodeLinker", "") == ""
