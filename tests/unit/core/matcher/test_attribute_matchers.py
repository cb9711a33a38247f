import unittest

from core.matcher import attribute_matchers as m
from core.matcher.models import AgeRange, SalaryRange, CandidateAttributes


class TestListMatchers(unittest.TestCase):

    def test_any_overlap_matches(self):
        self.assertTrue(m.match_categories(['Engineering', 'Sales'], ['Engineering']))
        self.assertTrue(m.match_skills(['Python', 'Go'], ['Go', 'SQL']))
        self.assertTrue(m.match_education_levels(['Master'], ['Bachelor', 'Master']))

    def test_no_overlap(self):
        self.assertFalse(m.match_categories(['Marketing'], ['Engineering']))
        self.assertFalse(m.match_skills(['Python'], []))

    def test_list_comparison_is_exact(self):
        self.assertFalse(m.match_skills(['python'], ['Python']))


class TestTextMatchers(unittest.TestCase):

    def test_city_is_case_insensitive(self):
        self.assertTrue(m.match_city('chennai', 'Chennai'))
        self.assertFalse(m.match_city('Chennai', 'Mumbai'))
        self.assertFalse(m.match_city('Chennai', None))

    def test_experience_and_job_type(self):
        self.assertTrue(m.match_experience('3-5 years', '3-5 Years'))
        self.assertFalse(m.match_experience('5-10 years', '3-5 years'))
        self.assertTrue(m.match_job_type('Full-time', 'full-time'))

    def test_keywords_are_substrings(self):
        self.assertTrue(m.match_keywords(['django'], 'senior django developer'))
        self.assertTrue(m.match_keywords(['Kafka', 'Spark'], 'streaming with spark'))
        self.assertFalse(m.match_keywords(['rust'], 'python developer'))
        self.assertFalse(m.match_keywords(['rust'], ''))


class TestSalaryRange(unittest.TestCase):

    def test_band_floor_must_reach_declared_minimum(self):
        self.assertFalse(m.match_salary_range(SalaryRange(min=1_200_000), '₹10-15 LPA'))
        self.assertTrue(m.match_salary_range(SalaryRange(min=900_000), '₹10-15 LPA'))

    def test_band_ceiling_must_stay_within_declared_maximum(self):
        self.assertTrue(m.match_salary_range(SalaryRange(max=1_500_000), '₹10-15 LPA'))
        self.assertFalse(m.match_salary_range(SalaryRange(max=1_400_000), '₹10-15 LPA'))

    def test_open_ended_band_fails_declared_maximum(self):
        self.assertFalse(m.match_salary_range(SalaryRange(max=5_000_000), '₹30+ LPA'))
        self.assertTrue(m.match_salary_range(SalaryRange(min=2_500_000), '₹30+ LPA'))

    def test_lowest_band(self):
        self.assertTrue(m.match_salary_range(SalaryRange(max=500_000), '< ₹5 LPA'))
        self.assertFalse(m.match_salary_range(SalaryRange(min=100_000), '< ₹5 LPA'))

    def test_negotiable(self):
        criterion = SalaryRange(min=900_000)
        self.assertFalse(m.match_salary_range(criterion, 'Negotiable'))
        self.assertTrue(m.match_salary_range(criterion, 'Negotiable', negotiable_matches=True))


class TestDiversityMatchers(unittest.TestCase):

    def test_gender(self):
        self.assertTrue(m.match_gender('Female', 'Female'))
        self.assertFalse(m.match_gender('Female', 'Male'))
        self.assertTrue(m.match_gender('No Preference', None))

    def test_age_range_is_inclusive(self):
        age_range = AgeRange(min=25, max=35)
        self.assertTrue(m.match_age_range(age_range, 25))
        self.assertTrue(m.match_age_range(age_range, 35))
        self.assertFalse(m.match_age_range(age_range, 36))
        self.assertFalse(m.match_age_range(age_range, None))

    def test_missing_bound_is_open(self):
        self.assertTrue(m.match_age_range(AgeRange(min=30), 70))
        self.assertTrue(m.match_age_range(AgeRange(max=30), 18))


class TestRemoteWork(unittest.TestCase):

    def test_any_always_matches(self):
        self.assertTrue(m.match_remote_work('Any', CandidateAttributes()))

    def test_remote_needs_remote_ready_candidate(self):
        self.assertTrue(m.match_remote_work('Remote Only', CandidateAttributes(remote_ready=True)))
        self.assertFalse(m.match_remote_work('Remote Only', CandidateAttributes(remote_ready=False)))
        self.assertTrue(m.match_remote_work('Remote', CandidateAttributes(remote_ready=True)))

    def test_work_mode_preference(self):
        self.assertTrue(m.match_remote_work('Hybrid', CandidateAttributes(remote_work='Hybrid')))
        self.assertTrue(m.match_remote_work('On-site', CandidateAttributes(remote_work='Any')))
        self.assertFalse(m.match_remote_work('On-site', CandidateAttributes(remote_work='Remote')))

    def test_job_work_mode(self):
        self.assertTrue(m.match_work_mode('Remote Only', 'Remote'))
        self.assertTrue(m.match_work_mode('Any', 'On-site'))
        self.assertFalse(m.match_work_mode('Hybrid', 'On-site'))


class TestJobTypePreference(unittest.TestCase):

    def test_preferred_job_types(self):
        self.assertTrue(m.match_job_type_preference('Contract', ['Full-time', 'contract']))
        self.assertFalse(m.match_job_type_preference('Internship', ['Full-time']))
        self.assertFalse(m.match_job_type_preference('Internship', []))


if __name__ == '__main__':
    unittest.main()
