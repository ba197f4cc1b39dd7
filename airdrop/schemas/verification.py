"""
Schemas & Encoding
File: verification.py

Purpose: Report format for re-verifying a distribution artifact offline.
Verification outcomes are reported as data, never as exceptions.

Check ids:
    root_recomputed             the listed entitlements rebuild the root
    claim_proof:<account_id>    that recipient's listed proof verifies
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


CheckSeverity = Literal["info", "error"]


class DistributionChecks:
    """Stable check ids emitted by verify_distribution."""

    ROOT_RECOMPUTED = "root_recomputed"
    CLAIM_PROOF_PREFIX = "claim_proof:"

    @classmethod
    def claim_proof(cls, account_id: str) -> str:
        return f"{cls.CLAIM_PROOF_PREFIX}{account_id}"

    @classmethod
    def account_of(cls, check_id: str) -> str | None:
        """Recipient a claim_proof check refers to, None for other checks."""
        if check_id.startswith(cls.CLAIM_PROOF_PREFIX):
            return check_id[len(cls.CLAIM_PROOF_PREFIX):]
        return None


class CheckResult(BaseModel):
    """One check against a distribution: the root, or one recipient's proof."""

    model_config = ConfigDict(extra="forbid")

    check_id: str = Field(
        ...,
        description="Check id, see DistributionChecks",
        min_length=1,
    )
    ok: bool = Field(
        ...,
        description="Whether the check passed",
    )
    severity: CheckSeverity = Field(
        ...,
        description="info for passed checks, error for failed ones",
    )
    message: str = Field(
        ...,
        description="Human-readable message describing the result",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Expected/actual root, or the failing claim's index",
    )

    @property
    def is_error(self) -> bool:
        return not self.ok and self.severity == "error"

    @classmethod
    def passed(
        cls,
        check_id: str,
        message: str = "Check passed",
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(
            check_id=check_id,
            ok=True,
            severity="info",
            message=message,
            details=details or {},
        )

    @classmethod
    def failed(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        return cls(
            check_id=check_id,
            ok=False,
            severity="error",
            message=message,
            details=details or {},
        )


class VerificationResult(BaseModel):
    """
    Outcome of re-verifying one distribution.

    ok is False as soon as any check fails.
    """

    model_config = ConfigDict(extra="forbid")

    ok: bool = Field(
        ...,
        description="Overall verification success",
    )
    checks: list[CheckResult] = Field(
        default_factory=list,
        description="Root check followed by one check per claim",
    )

    @property
    def error_count(self) -> int:
        return sum(1 for check in self.checks if check.is_error)

    @property
    def passed_count(self) -> int:
        return sum(1 for check in self.checks if check.ok)

    @property
    def root_matches(self) -> bool:
        """Whether the root_recomputed check ran and passed."""
        return any(
            check.ok
            for check in self.checks
            if check.check_id == DistributionChecks.ROOT_RECOMPUTED
        )

    def get_failed_checks(self) -> list[CheckResult]:
        return [check for check in self.checks if not check.ok]

    def unverified_accounts(self) -> list[str]:
        """Recipients whose listed proof does not verify, in claim order."""
        accounts = []
        for check in self.get_failed_checks():
            account_id = DistributionChecks.account_of(check.check_id)
            if account_id is not None:
                accounts.append(account_id)
        return accounts

    @classmethod
    def success(cls, checks: list[CheckResult] | None = None) -> "VerificationResult":
        return cls(ok=True, checks=checks or [])

    def add_check(self, check: CheckResult) -> None:
        self.checks.append(check)
        if not check.ok:
            self.ok = False
