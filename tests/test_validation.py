import unittest

from devconnector.services.validation import (
    EDUCATION_RULES,
    EXPERIENCE_RULES,
    PROFILE_RULES,
    RequestFieldsInvalid,
    check_required,
)


class TestCheckRequired(unittest.TestCase):
    def test_passes_when_all_present(self):
        check_required({"status": "Dev", "skills": "python"}, PROFILE_RULES)

    def test_reports_every_missing_field_in_order(self):
        with self.assertRaises(RequestFieldsInvalid) as ctx:
            check_required({"degree": "BSc"}, EDUCATION_RULES)
        self.assertEqual(
            ctx.exception.errors,
            [
                {"field": "school", "message": "School is required"},
                {"field": "fieldofstudy", "message": "Field of Study is required"},
                {"field": "from", "message": "From date is required"},
            ],
        )

    def test_blank_strings_count_as_missing(self):
        with self.assertRaises(RequestFieldsInvalid) as ctx:
            check_required({"status": "  ", "skills": "go"}, PROFILE_RULES)
        self.assertEqual(ctx.exception.errors, [{"field": "status", "message": "Status is required"}])

    def test_experience_rules(self):
        with self.assertRaises(RequestFieldsInvalid) as ctx:
            check_required({"title": "Engineer", "company": "Acme"}, EXPERIENCE_RULES)
        self.assertEqual([e["field"] for e in ctx.exception.errors], ["from"])
