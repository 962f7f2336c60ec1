# SMB FinGuard - Financial Intelligence Engine for SMBs
# Copyright (c) 2025 Maxence Bernard (maxencebernardhub)
# Licensed under the MIT License. See LICENSE file for details.

"""
Compliance rule engine.

A fixed set of independent internal-control rules is evaluated against
whichever inputs are present in a ComplianceBag. A rule whose input is
absent is skipped; only violations are reported.

Rules
-----
- Separation of duties (error): an approval created and approved by the
  same user.
- Approval threshold (error): a transaction above 100,000 without an
  approval flag.
- Liquidity floor (warning): current ratio below 1.0.
- Leverage ceiling (warning): debt-to-equity above 2.0.
- Least privilege (warning): administrators above 20% of all users.
"""

from dataclasses import dataclass
from typing import Literal

from .models import ComplianceBag

Severity = Literal["warning", "error"]

APPROVAL_THRESHOLD = 100_000
MIN_CURRENT_RATIO = 1.0
MAX_DEBT_TO_EQUITY = 2.0
MAX_ADMIN_SHARE = 0.2
ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class ComplianceFinding:
    """
    A failed compliance rule.

    Attributes:
        rule: Name of the violated rule.
        severity: 'error' (blocking control failure) or 'warning'.
        details: What was found.
        action: Suggested remediation.
    """

    rule: str
    severity: Severity
    details: str
    action: str


def check_compliance(bag: ComplianceBag) -> tuple[ComplianceFinding, ...]:
    """Evaluate the rule set and return the violations, in rule order."""
    findings: list[ComplianceFinding] = []

    if bag.approvals is not None:
        self_approved = [a for a in bag.approvals if a.created_by == a.approved_by]
        if self_approved:
            findings.append(
                ComplianceFinding(
                    rule="Separation of duties",
                    severity="error",
                    details=f"{len(self_approved)} self-approval(s) detected",
                    action="Revoke self-approvals and reroute them to another approver",
                )
            )

    if bag.transactions is not None:
        unapproved = [
            t
            for t in bag.transactions
            if t.amount > APPROVAL_THRESHOLD and not t.approved
        ]
        if unapproved:
            findings.append(
                ComplianceFinding(
                    rule="Approval thresholds",
                    severity="error",
                    details=(
                        f"{len(unapproved)} transaction(s) above "
                        f"{APPROVAL_THRESHOLD:,} without approval"
                    ),
                    action="Suspend the transactions until they are approved",
                )
            )

    ratios = bag.financial_ratios
    if ratios is not None:
        if ratios.current_ratio is not None and ratios.current_ratio < MIN_CURRENT_RATIO:
            findings.append(
                ComplianceFinding(
                    rule="Liquidity floor",
                    severity="warning",
                    details=f"Current ratio {ratios.current_ratio:.2f} is below 1.0",
                    action="Review the liquidity plan",
                )
            )

        if ratios.debt_to_equity is not None and ratios.debt_to_equity > MAX_DEBT_TO_EQUITY:
            findings.append(
                ComplianceFinding(
                    rule="Leverage ceiling",
                    severity="warning",
                    details=(
                        f"Debt-to-equity ratio {ratios.debt_to_equity:.2f} exceeds 2.0"
                    ),
                    action="Reduce borrowing or raise equity",
                )
            )

    if bag.users is not None:
        admins = sum(1 for u in bag.users if u.role == ADMIN_ROLE)
        if admins > len(bag.users) * MAX_ADMIN_SHARE:
            findings.append(
                ComplianceFinding(
                    rule="Least privilege",
                    severity="warning",
                    details=(
                        f"{admins} administrator(s) out of {len(bag.users)} users "
                        "exceeds 20%"
                    ),
                    action="Review and reduce administrative privileges",
                )
            )

    return tuple(findings)
