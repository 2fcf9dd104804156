"""
Default permission table — which access level each role starts with.

Used only when the permission store is empty (first run) and by
"reset to defaults". The table is a pure function of JOB_TITLES and
NAVIGATION_ITEMS.

Per role, the first matching rule wins:

    home items       → edit
    read-only items  → view
    hidden items, or any -office / -reviewer section
    when the role hides administrative sections → hide
    everything else  → edit
"""

from dataclasses import dataclass

from research_admin.navigation.catalog import (
    AccessLevel,
    JOB_TITLES,
    NAVIGATION_ITEMS,
    is_admin_section,
)
from research_admin.navigation.models import NavigationPermission


@dataclass(frozen=True)
class RoleDefaults:
    home: frozenset[str] = frozenset()
    read_only: frozenset[str] = frozenset()
    hidden: frozenset[str] = frozenset()
    hide_admin_sections: bool = False

    def access_for(self, navigation_item: str) -> AccessLevel:
        if navigation_item in self.home:
            return AccessLevel.EDIT
        if navigation_item in self.read_only:
            return AccessLevel.VIEW
        if navigation_item in self.hidden:
            return AccessLevel.HIDE
        if self.hide_admin_sections and is_admin_section(navigation_item):
            return AccessLevel.HIDE
        return AccessLevel.EDIT


_FULL_ACCESS = RoleDefaults()


def _officer(home: set[str], read_only: set[str]) -> RoleDefaults:
    """Officers keep their own office/reviewer sections and lose everyone else's."""
    return RoleDefaults(
        home=frozenset(home),
        read_only=frozenset(read_only),
        hide_admin_sections=True,
    )


# ── Researchers: no office/reviewer access ──
_INVESTIGATOR = RoleDefaults(
    read_only=frozenset({"reports"}),
    hide_admin_sections=True,
)

_PHD_STUDENT = RoleDefaults(
    read_only=frozenset({"reports", "programs"}),
    hidden=frozenset({"contracts", "patents"}),
    hide_admin_sections=True,
)

# ── Compliance offices ──
_IRB_OFFICER = _officer({"irb-applications", "irb-office", "irb-reviewer"}, {"reports"})
_IBC_OFFICER = _officer({"ibc-applications", "ibc-office", "ibc-reviewer"}, {"reports"})

# ── Administration offices ──
_PMO_OFFICER = _officer({"pmo-applications", "pmo-office", "programs", "projects"}, {"reports"})
_OUTCOME_OFFICER = _officer({"outcome-office", "publications", "patents"}, {"reports"})
_GRANT_OFFICER = _officer({"grants"}, {"contracts", "reports"})
_CONTRACTS_OFFICER = _officer({"contracts"}, {"grants", "patents", "reports"})


ROLE_DEFAULTS: dict[str, RoleDefaults] = {
    "Investigator": _INVESTIGATOR,
    "PhD Student": _PHD_STUDENT,
    "IRB Officer": _IRB_OFFICER,
    "IBC Officer": _IBC_OFFICER,
    "PMO Officer": _PMO_OFFICER,
    "Outcome Officer": _OUTCOME_OFFICER,
    "Grant Officer": _GRANT_OFFICER,
    "Contracts Officer": _CONTRACTS_OFFICER,
}


def default_access_level(job_title: str, navigation_item: str) -> AccessLevel:
    return ROLE_DEFAULTS.get(job_title, _FULL_ACCESS).access_for(navigation_item)


def generate_defaults() -> list[NavigationPermission]:
    """Build the full JOB_TITLES × NAVIGATION_ITEMS table, one record per pair."""
    return [
        NavigationPermission(
            job_title=job_title,
            navigation_item=navigation_item,
            access_level=default_access_level(job_title, navigation_item),
        )
        for job_title in JOB_TITLES
        for navigation_item in NAVIGATION_ITEMS
    ]
