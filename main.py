import sys
import json
import logging
import argparse
from dataclasses import asdict

from core.config_loader import load_config
from core.exceptions import ServiceException
from core.matcher.alert_matcher import AlertMatcher
from core.scorer.ranking import rank_against_criteria
from core.scorer.recommendation import recommend_jobs

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def load_json(path):
    """Read a JSON document; '-' reads stdin."""
    try:
        if path == '-':
            return json.load(sys.stdin)
        with open(path, "r") as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ServiceException(f"Could not read {path}: {e}") from e


def _page_to_dict(ranked_page):
    return {
        'page': ranked_page.page,
        'limit': ranked_page.limit,
        'total': ranked_page.total,
        'total_pages': ranked_page.total_pages,
        'results': [
            {'score': round(s.score, 2), 'matched': s.matched, 'components': s.components, 'item': s.item}
            for s in ranked_page.results
        ],
    }


def run_match(args, config):
    """Score one candidate, or rank a list of candidates, against alert criteria."""
    matcher = AlertMatcher(threshold=config.matching.match_threshold)
    source = load_json(args.candidate)
    criteria = load_json(args.criteria)

    if isinstance(source, list):
        pagination = config.matching.pagination
        ranked_page = rank_against_criteria(
            source, criteria,
            page=args.page or pagination.default_page,
            limit=min(args.limit or pagination.default_limit, pagination.max_limit),
            matcher=matcher,
            only_matched=config.matching.only_matched_listings,
            target='job' if args.jobs else 'candidate',
        )
        return _page_to_dict(ranked_page)

    if args.jobs:
        result = matcher.match_job_to_alert(source, criteria)
    else:
        result = matcher.match_to_alert(source, criteria)
    return asdict(result)


def run_recommend(args, config):
    """Rank a list of jobs for one candidate."""
    candidate = load_json(args.candidate)
    jobs = load_json(args.jobs_file)
    if not isinstance(jobs, list):
        raise ServiceException("Jobs file must contain a JSON list")

    pagination = config.matching.pagination
    ranked_page = recommend_jobs(
        candidate, jobs,
        page=args.page or pagination.default_page,
        limit=min(args.limit or pagination.default_limit, pagination.max_limit),
        weights=config.matching.recommendation,
    )
    return _page_to_dict(ranked_page)


def build_parser():
    parser = argparse.ArgumentParser(description="Job board alert matching and recommendations")
    parser.add_argument('--config', type=str, default='config.yaml', help='Path to config YAML')
    parser.add_argument('--threshold', type=float, default=None,
                        help='Override the match threshold (0-100)')
    parser.add_argument('--page', type=int, default=None, help='Result page (1-based)')
    parser.add_argument('--limit', type=int, default=None, help='Results per page')

    subparsers = parser.add_subparsers(dest='command', required=True)

    match_parser = subparsers.add_parser('match', help='Score candidates or jobs against alert criteria')
    match_parser.add_argument('candidate', help="Candidate (or job) JSON document or list; '-' for stdin")
    match_parser.add_argument('criteria', help='Alert criteria JSON document')
    match_parser.add_argument('--jobs', action='store_true',
                              help='Documents are job postings matched against job-alert criteria')

    recommend_parser = subparsers.add_parser('recommend', help='Rank jobs for a candidate')
    recommend_parser.add_argument('candidate', help="Candidate JSON document; '-' for stdin")
    recommend_parser.add_argument('jobs_file', help='JSON list of job postings')

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = load_config(args.config)
    if args.threshold is not None:
        config.matching.match_threshold = args.threshold

    try:
        if args.command == 'match':
            output = run_match(args, config)
        else:
            output = run_recommend(args, config)
    except ServiceException as e:
        logger.error(str(e))
        return 1

    print(json.dumps(output, indent=2, default=str))
    return 0


if __name__ == "__main__":
    sys.exit(main())
