import unittest

from devconnector.models import EducationIn, ExperienceIn, ProfileIn


class TestRequestModels(unittest.TestCase):
    def test_entry_accepts_wire_name_and_field_name(self):
        wire = ExperienceIn.model_validate({"title": "Dev", "from": "2020-01-01"})
        by_name = ExperienceIn(title="Dev", from_="2020-01-01")
        self.assertEqual(wire.from_, "2020-01-01")
        self.assertEqual(by_name.from_, "2020-01-01")
        self.assertEqual(by_name.model_dump(by_alias=True, exclude_none=True), {"title": "Dev", "from": "2020-01-01"})

    def test_camel_case_inputs(self):
        profile = ProfileIn.model_validate({"status": "Dev", "githubUsername": "octocat"})
        education = EducationIn.model_validate({"school": "MIT", "fieldOfStudy": "CS"})
        self.assertEqual(profile.githubusername, "octocat")
        self.assertEqual(education.fieldofstudy, "CS")
