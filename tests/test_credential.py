"""Tests for credential parsing and the expiry check."""

import base64
import json
from datetime import datetime, timedelta, timezone

import pytest

from nats_health_check.checks import CredentialCheck, NoDataError
from nats_health_check.config import CredentialThresholds
from nats_health_check.credentials import CredentialError, load_credential, parse_credential
from nats_health_check.models import Credential
from nats_health_check.result import Result

NOW = datetime(2024, 6, 1, tzinfo=timezone.utc)
EXPIRES_2100 = datetime(2100, 1, 1, tzinfo=timezone.utc)
HUNDRED_YEARS = timedelta(days=100 * 365)


def make_jwt(claims: dict) -> str:
    def segment(data: dict) -> str:
        return base64.urlsafe_b64encode(json.dumps(data).encode()).decode().rstrip("=")

    return f"{segment({'typ': 'JWT', 'alg': 'ed25519-nkey'})}.{segment(claims)}.c2lnbmF0dXJl"


def make_creds(claims: dict) -> str:
    return (
        "-----BEGIN NATS USER JWT-----\n"
        f"{make_jwt(claims)}\n"
        "------END NATS USER JWT------\n"
        "\n"
        "************************* IMPORTANT *************************\n"
        "NKEY Seed printed below can be used to sign and prove identity.\n"
        "\n"
        "-----BEGIN USER NKEY SEED-----\n"
        "SUAIQJDZJGYOJN4NBOLYRRENCNTPXZ7PPVQW7RWEXWJUNBAFDRPDO27JWA\n"
        "------END USER NKEY SEED------\n"
    )


def run(thresholds: CredentialThresholds, credential: Credential | None) -> Result:
    result = Result(check="credential")
    CredentialCheck(thresholds, clock=lambda: NOW).check(result, credential)
    return result


class TestParseCredential:
    """Tests for reading expiry from creds files."""

    def test_no_expiry(self):
        credential = parse_credential(make_creds({"name": "bob", "iat": 1695369655}))
        assert credential.expires_at is None

    def test_expiry(self):
        credential = parse_credential(make_creds({"name": "bob", "exp": 4102444800}))
        assert credential.expires_at == EXPIRES_2100

    def test_bare_jwt(self):
        credential = parse_credential(make_jwt({"exp": 4102444800}))
        assert credential.expires_at == EXPIRES_2100

    def test_garbage(self):
        with pytest.raises(CredentialError):
            parse_credential("not a credential at all")

    def test_bad_claims(self):
        with pytest.raises(CredentialError):
            parse_credential("aGVhZGVy.!!!notbase64!!!.c2ln")

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "user.creds"
        path.write_text(make_creds({"exp": 4102444800}))
        assert load_credential(path).expires_at == EXPIRES_2100

    def test_missing_file(self, tmp_path):
        with pytest.raises(CredentialError):
            load_credential(tmp_path / "missing.creds")


class TestCredentialCheck:
    """Tests for credential expiry evaluation."""

    def test_no_credential(self):
        with pytest.raises(NoDataError):
            run(CredentialThresholds(), None)

    def test_never_expires_when_required(self):
        result = run(CredentialThresholds(require_expiry=True), Credential())
        assert result.criticals == ["never expires"]
        assert result.warnings == []

    def test_never_expires_when_not_required(self):
        result = run(CredentialThresholds(), Credential())
        assert result.criticals == []

    def test_expires_ok(self):
        result = run(CredentialThresholds(require_expiry=True), Credential(EXPIRES_2100))
        assert result.criticals == []
        assert result.warnings == []
        assert result.oks == ["expires in 2100-01-01 00:00:00 +0000 UTC"]

    def test_critical(self):
        result = run(CredentialThresholds(validity_critical=HUNDRED_YEARS), Credential(EXPIRES_2100))
        assert result.criticals == ["expires sooner than 100y0d0h0m0s"]
        assert result.warnings == []
        assert result.oks == []

    def test_warning(self):
        result = run(CredentialThresholds(validity_warning=HUNDRED_YEARS), Credential(EXPIRES_2100))
        assert result.warnings == ["expires sooner than 100y0d0h0m0s"]
        assert result.criticals == []
        assert result.oks == []

    def test_warning_band(self):
        t = CredentialThresholds(validity_warning=timedelta(days=30), validity_critical=timedelta(days=7))
        result = run(t, Credential(NOW + timedelta(days=10)))
        assert result.warnings == ["expires sooner than 30d0h0m0s"]
        assert result.render() == "expiry=864000.0000s;2592000.0000;604800.0000"

    def test_invalid_thresholds(self):
        t = CredentialThresholds(validity_warning=timedelta(days=7), validity_critical=timedelta(days=30))
        result = run(t, Credential(EXPIRES_2100))
        assert result.criticals == ["credential: invalid thresholds"]
