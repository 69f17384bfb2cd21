import argparse
import logging
import sys
from pathlib import Path

from statscard.colour_profiles import available_profiles
from statscard.core.observability import init_logging
from statscard.core.observability import init_sentry
from statscard.services.card_service import GitHubAPIError
from statscard.services.card_service import InvalidGitHubTokenError
from statscard.services.card_service import fetch_card_data
from statscard.services.card_service import render_card_svg
from statscard.settings import Settings


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="statscard",
        description="Generate an SVG stats card for a GitHub profile.",
    )
    parser.add_argument("--login", help="GitHub login (defaults to the token owner)")
    parser.add_argument("--theme", help="colour profile name")
    parser.add_argument("--output", help="path of the SVG file to write")
    parser.add_argument(
        "--list-themes", action="store_true", help="print available colour profiles"
    )
    return parser


def write_step_summary(summary_path: str | None, svg_content: str) -> None:
    """Append the card to the GitHub Actions step summary when running in Actions."""

    if not summary_path:
        logger.warning("GITHUB_STEP_SUMMARY not set, skipping step summary update")
        return

    with open(summary_path, "a", encoding="utf-8") as summary_file:
        summary_file.write("## Coding Metrics\n\n")
        summary_file.write("Generated coding metrics SVG:\n\n")
        summary_file.write(svg_content)
        summary_file.write("\n")
    logger.info("Added SVG to GitHub Actions step summary")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    if args.list_themes:
        print("\n".join(available_profiles()))
        return 0

    settings = Settings()
    init_logging(settings)
    init_sentry(settings)

    if not settings.github_token:
        logger.error("GITHUB_TOKEN is not set")
        return 1

    try:
        card_data = fetch_card_data(
            token=settings.github_token,
            settings=settings,
            login=args.login or settings.github_login,
        )
    except InvalidGitHubTokenError:
        logger.error("GitHub token is invalid")
        return 1
    except GitHubAPIError:
        logger.exception("GitHub API request failed")
        return 1

    svg_content = render_card_svg(card_data, args.theme or settings.colour_profile)

    output_path = Path(args.output or settings.output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(svg_content, encoding="utf-8")
    logger.info("Wrote SVG to %s", output_path)

    write_step_summary(settings.github_step_summary, svg_content)
    return 0


if __name__ == "__main__":
    sys.exit(main())
