"""
Navigation catalog — the closed sets of job titles and navigation items.

Both lists are compiled into the application. Adding a role or a new
section of the site is a code change here, not a data migration: the
default table generator and the admin matrix both iterate these tuples.
"""

from dataclasses import dataclass
from enum import Enum


class AccessLevel(str, Enum):
    HIDE = "hide"    # not rendered
    VIEW = "view"    # rendered, read-only
    EDIT = "edit"    # rendered, mutable


JOB_TITLES: tuple[str, ...] = (
    "Investigator",
    "Staff Scientist",
    "Physician",
    "Research Specialist",
    "Research Associate",
    "Research Assistant",
    "Lab Manager",
    "Postdoctoral Researcher",
    "PhD Student",
    "Management",
    "IRB Board Member",
    "IBC Board Member",
    "PMO Officer",
    "IRB Officer",
    "IBC Officer",
    "Outcome Officer",
    "Grant Officer",
    "Contracts Officer",
)


@dataclass(frozen=True)
class NavigationItem:
    id: str
    name: str
    description: str


NAVIGATION_CATALOG: tuple[NavigationItem, ...] = (
    NavigationItem("dashboard", "Dashboard", "System overview and statistics"),
    NavigationItem("scientists", "Scientists & Staff", "Research team management"),
    NavigationItem("facilities", "Facilities", "Buildings and rooms management"),
    NavigationItem("programs", "Programs (PRM)", "Research programs"),
    NavigationItem("projects", "Projects (PRJ)", "Research projects"),
    NavigationItem("research-activities", "Research Activities (SDR)", "Scientific data records"),
    NavigationItem("irb-applications", "IRB Applications", "Ethics review applications"),
    NavigationItem("irb-office", "IRB Office", "IRB administration"),
    NavigationItem("irb-reviewer", "IRB Reviewer", "IRB review interface"),
    NavigationItem("ibc-applications", "IBC Applications", "Biosafety applications"),
    NavigationItem("ibc-office", "IBC Office", "IBC administration"),
    NavigationItem("ibc-reviewer", "IBC Reviewer", "IBC review interface"),
    NavigationItem("pmo-applications", "PMO Applications", "Project proposals and amendments"),
    NavigationItem("pmo-office", "PMO Office", "Project management office review"),
    NavigationItem("grants", "Grants", "Funding applications and awards"),
    NavigationItem("data-management", "Data Management Plans", "Research data governance"),
    NavigationItem("contracts", "Research Contracts", "Collaboration agreements"),
    NavigationItem("publications", "Publications", "Academic publications"),
    NavigationItem("outcome-office", "Outcome Office", "Research outcomes and impact tracking"),
    NavigationItem("patents", "Patents", "Intellectual property"),
    NavigationItem("reports", "Reports", "System reports and analytics"),
)

NAVIGATION_ITEMS: tuple[str, ...] = tuple(item.id for item in NAVIGATION_CATALOG)

_ADMIN_SECTION_MARKERS = ("-office", "-reviewer")


def is_admin_section(navigation_item: str) -> bool:
    """Office and reviewer sections are administrative / review-only."""
    return any(marker in navigation_item for marker in _ADMIN_SECTION_MARKERS)
