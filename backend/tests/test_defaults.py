"""Tests for the navigation catalog and the default permission table."""

import pytest

from research_admin.navigation import (
    AccessLevel,
    JOB_TITLES,
    NAVIGATION_ITEMS,
    PermissionResolver,
    default_access_level,
    generate_defaults,
)
from research_admin.navigation.catalog import is_admin_section


class TestCatalog:
    def test_navigation_items_are_unique(self):
        assert len(NAVIGATION_ITEMS) == len(set(NAVIGATION_ITEMS))

    def test_job_titles_are_unique(self):
        assert len(JOB_TITLES) == len(set(JOB_TITLES))

    @pytest.mark.parametrize("item", ["irb-office", "ibc-reviewer", "outcome-office", "pmo-office"])
    def test_admin_sections(self, item):
        assert is_admin_section(item)

    @pytest.mark.parametrize("item", ["dashboard", "irb-applications", "grants", "reports"])
    def test_regular_sections(self, item):
        assert not is_admin_section(item)


class TestGenerateDefaults:
    def test_covers_cross_product_exactly_once(self):
        defaults = generate_defaults()
        pairs = [(p.job_title, p.navigation_item) for p in defaults]
        assert len(defaults) == len(JOB_TITLES) * len(NAVIGATION_ITEMS)
        assert len(set(pairs)) == len(pairs)
        assert set(pairs) == {(j, n) for j in JOB_TITLES for n in NAVIGATION_ITEMS}

    def test_is_deterministic(self):
        assert generate_defaults() == generate_defaults()

    def test_ids_are_composite_keys(self):
        first = generate_defaults()[0]
        assert first.id == f"{first.job_title}-{first.navigation_item}"

    def test_unlisted_roles_get_full_access(self):
        levels = {default_access_level("Staff Scientist", item) for item in NAVIGATION_ITEMS}
        assert levels == {AccessLevel.EDIT}


class TestRoleRules:
    def setup_method(self):
        self.resolver = PermissionResolver(generate_defaults())

    def test_phd_student_hidden_from_contracts(self):
        assert self.resolver.get_access_level("PhD Student", "contracts") == AccessLevel.HIDE

    def test_phd_student_keeps_grants(self):
        assert self.resolver.get_access_level("PhD Student", "grants") == AccessLevel.EDIT
        assert self.resolver.is_hidden("PhD Student", "patents")

    def test_phd_student_read_only_programs_and_reports(self):
        assert self.resolver.get_access_level("PhD Student", "programs") == AccessLevel.VIEW
        assert self.resolver.get_access_level("PhD Student", "reports") == AccessLevel.VIEW

    def test_phd_student_hidden_from_offices(self):
        for item in NAVIGATION_ITEMS:
            if is_admin_section(item):
                assert self.resolver.is_hidden("PhD Student", item), item

    def test_investigator_defaults(self):
        assert self.resolver.get_access_level("Investigator", "irb-office") == AccessLevel.HIDE
        assert self.resolver.get_access_level("Investigator", "ibc-reviewer") == AccessLevel.HIDE
        assert self.resolver.get_access_level("Investigator", "reports") == AccessLevel.VIEW
        assert self.resolver.get_access_level("Investigator", "irb-applications") == AccessLevel.EDIT
        assert self.resolver.get_access_level("Investigator", "contracts") == AccessLevel.EDIT

    def test_grant_officer_keeps_own_domain(self):
        assert self.resolver.get_access_level("Grant Officer", "grants") == AccessLevel.EDIT
        assert self.resolver.get_access_level("Grant Officer", "irb-office") == AccessLevel.HIDE
        assert self.resolver.get_access_level("Grant Officer", "contracts") == AccessLevel.VIEW

    def test_contracts_officer_keeps_own_domain(self):
        assert self.resolver.get_access_level("Contracts Officer", "contracts") == AccessLevel.EDIT
        assert self.resolver.get_access_level("Contracts Officer", "grants") == AccessLevel.VIEW
        assert self.resolver.get_access_level("Contracts Officer", "ibc-office") == AccessLevel.HIDE

    def test_irb_officer_sees_own_office_only(self):
        assert self.resolver.can_edit("IRB Officer", "irb-office")
        assert self.resolver.can_edit("IRB Officer", "irb-reviewer")
        assert self.resolver.is_hidden("IRB Officer", "ibc-office")
        assert self.resolver.is_hidden("IRB Officer", "pmo-office")
        assert self.resolver.is_read_only("IRB Officer", "reports")

    def test_outcome_officer_keeps_outcome_office(self):
        assert self.resolver.can_edit("Outcome Officer", "outcome-office")
        assert self.resolver.is_hidden("Outcome Officer", "irb-reviewer")
