"""Inputs describing one migration run."""

from __future__ import annotations

from dataclasses import dataclass

STAGE_ORDER = ("user", "accounts", "transactions", "budgets", "goals", "alerts", "tags")


@dataclass(frozen=True)
class MigrationConfig:
    """Vendor credentials supplied by the caller. Never persisted."""

    api_key: str
    partner_domain: str
    pcid: str
    partner_id: str

    @property
    def user_id(self) -> int:
        try:
            return int(str(self.pcid).strip())
        except ValueError as exc:
            raise ValueError(f"Invalid pcid: {self.pcid!r}") from exc

    @property
    def partner_id_value(self) -> int:
        try:
            return int(str(self.partner_id).strip())
        except ValueError as exc:
            raise ValueError(f"Invalid partner id: {self.partner_id!r}") from exc


@dataclass(frozen=True)
class MigrationEntities:
    user: bool = False
    accounts: bool = False
    transactions: bool = False
    budgets: bool = False
    goals: bool = False
    alerts: bool = False
    tags: bool = False

    def selected(self) -> list[str]:
        """Return the selected stage names in execution order."""

        return [name for name in STAGE_ORDER if getattr(self, name)]


__all__ = ["MigrationConfig", "MigrationEntities", "STAGE_ORDER"]
