import unittest

from core.config_loader import RecommendationWeights
from core.matcher.models import CandidateAttributes, JobAttributes
from core.scorer.recommendation import (
    salary_meets_expectation, score_job_for_candidate, recommend_jobs
)


class TestSalaryMeetsExpectation(unittest.TestCase):

    def test_offered_floor_reaches_expected_floor(self):
        self.assertTrue(salary_meets_expectation('₹15-20 LPA', '₹10-15 LPA'))
        self.assertTrue(salary_meets_expectation('₹10-15 LPA', '₹10-15 LPA'))
        self.assertFalse(salary_meets_expectation('₹5-10 LPA', '₹10-15 LPA'))

    def test_negotiable_and_unknown(self):
        self.assertFalse(salary_meets_expectation('Negotiable', '₹10-15 LPA'))
        self.assertFalse(salary_meets_expectation('₹10-15 LPA', ''))
        self.assertFalse(salary_meets_expectation('', '₹10-15 LPA'))


class TestScoreJobForCandidate(unittest.TestCase):

    def test_two_categories_and_city(self):
        candidate = CandidateAttributes(
            title='Engineer',
            categories=['Engineering', 'IT', 'Design'],
            city='Chennai',
            experience='3-5 years',
        )
        job = JobAttributes(categories=['Engineering', 'IT'], city='chennai')
        score, components = score_job_for_candidate(candidate, job)
        self.assertEqual(score, 65)
        self.assertEqual(components['category_overlap'], 2)
        self.assertTrue(components['city_match'])
        self.assertEqual(components['text_similarity'], 0.0)

    def test_every_signal(self):
        candidate = CandidateAttributes(
            title='python developer',
            categories=['Engineering'],
            city='Pune',
            experience='3-5 years',
            expected_salary='₹10-15 LPA',
            job_types=['Full-time'],
        )
        job = JobAttributes(
            title='python developer',
            categories=['Engineering'],
            city='Pune',
            experience='3-5 years',
            job_type='Full-time',
            offered_salary='₹15-20 LPA',
        )
        score, components = score_job_for_candidate(candidate, job)
        # 20 + 25 + 15 + 15 + 10 + 15 * similarity (< 1, the candidate text also carries categories)
        self.assertGreater(score, 85)
        self.assertLessEqual(score, 100)
        self.assertTrue(components['salary_match'])
        self.assertTrue(components['job_type_match'])

    def test_score_is_clamped(self):
        candidate = CandidateAttributes(categories=['A', 'B', 'C', 'D', 'E', 'F'], city='X')
        job = JobAttributes(categories=['A', 'B', 'C', 'D', 'E', 'F'], city='X')
        score, components = score_job_for_candidate(candidate, job)
        self.assertEqual(score, 100)
        self.assertEqual(components['raw_score'], 145)

    def test_custom_weights(self):
        weights = RecommendationWeights(category=0, city=50, experience=0, job_type=0, salary=0, text_similarity=0)
        score, _ = score_job_for_candidate(CandidateAttributes(city='Pune'), JobAttributes(city='Pune'), weights)
        self.assertEqual(score, 50)


class TestRecommendJobs(unittest.TestCase):

    def test_ranks_and_paginates_jobs(self):
        candidate = {
            'fullName': 'Ravi',
            'categories': ['Engineering', 'IT'],
            'location': {'city': 'Chennai'},
        }
        jobs = [
            {'_id': 'j1', 'specialisms': ['Sales']},
            {'_id': 'j2', 'specialisms': ['Engineering', 'IT'], 'location': {'city': 'Chennai'}},
            {'_id': 'j3', 'specialisms': ['Engineering']},
        ]
        page = recommend_jobs(candidate, jobs, page=1, limit=2)
        self.assertEqual([s.item['_id'] for s in page.results], ['j2', 'j3'])
        self.assertEqual(page.results[0].score, 65)
        self.assertEqual(page.total, 3)


if __name__ == '__main__':
    unittest.main()
