"""Check policies."""

from nats_health_check.checks.account import AccountCheck
from nats_health_check.checks.base import BaseCheck, CheckError, NoDataError, WrongTargetError
from nats_health_check.checks.cluster import ClusterCheck
from nats_health_check.checks.credential import CredentialCheck
from nats_health_check.checks.message import MessageCheck
from nats_health_check.checks.vitals import VitalsCheck

CHECKS: dict[str, type[BaseCheck]] = {
    check.name: check
    for check in (VitalsCheck, AccountCheck, ClusterCheck, CredentialCheck, MessageCheck)
}

__all__ = [
    "CHECKS",
    "AccountCheck",
    "BaseCheck",
    "CheckError",
    "ClusterCheck",
    "CredentialCheck",
    "MessageCheck",
    "NoDataError",
    "VitalsCheck",
    "WrongTargetError",
]
