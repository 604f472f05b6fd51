"""CLI entry point for scaffolding scenario tests.

Run from the root of an action repository:
    action-testing-init
"""

from pathlib import Path

import click

from .scaffold import init_project, load_metadata

METADATA_FILE = "metadata.yaml"

NEXT_STEPS = """
Next steps:
  1. Edit tests/scenarios.yaml:
     - Set the request method and URL to match your action's API call
     - Set invoke.returns to match your action's actual return values
     - Add more scenarios for error cases (429, 401, etc.)
  2. Edit tests/fixtures/200-success.http:
     - Replace the body with an actual API response (use: curl -i <url>)
     - Create additional fixtures for error scenarios
  3. Add tests/test_scenarios.py to use scenario-based testing:
     from action_testing import run_scenarios
     TestScenarios = run_scenarios(script="./src/script.py", scenarios="./tests/scenarios.yaml")
  4. Run: pytest
"""


@click.command()
@click.option(
    "--dir",
    "root",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Action repository root containing metadata.yaml.",
)
def main(root: Path):
    """Create starter scenario tests from metadata.yaml."""
    metadata_path = root / METADATA_FILE
    if not metadata_path.exists():
        raise click.ClickException(
            f"{METADATA_FILE} not found in {root.resolve()}.\n"
            "Run this command from the root of an action repository."
        )

    metadata = load_metadata(metadata_path)
    result = init_project(root, metadata)

    click.echo(f"\nInitialized scenario tests for {metadata['name']}\n")
    for path in result.created:
        click.echo(f"  Created: {path}")
    for path in result.skipped:
        click.echo(f"  Skipped: {path} (already exists)")
    click.echo(NEXT_STEPS)


if __name__ == "__main__":
    main()
