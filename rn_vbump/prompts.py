"""Interactive prompts.

Each prompt lists numbered choices and returns the chosen value. Ctrl-C or
end of input raises click.Abort, which the CLI reports as a cancellation.
"""

from __future__ import annotations

import click

from .models import Target
from .versions import FormatError, bump_version

PLATFORM_CHOICES: list[tuple[str, list[Target]]] = [
    ("Both platforms (app version + build number)", [Target.ANDROID, Target.IOS]),
    ("Android (app version + build number)", [Target.ANDROID]),
    ("iOS (app version + build number)", [Target.IOS]),
    ("Both platforms (build numbers only)", [Target.BUILD_NUMBERS_ONLY]),
    ("Android build number only (versionCode)", [Target.ANDROID_BUILD_NUMBER_ONLY]),
    ("iOS build number only (CURRENT_PROJECT_VERSION)", [Target.IOS_BUILD_NUMBER_ONLY]),
]

INCREMENT_LABELS = (
    ("patch", "Patch", "Bug fixes"),
    ("minor", "Minor", "New features"),
    ("major", "Major", "Breaking changes"),
)


def _choose(message: str, labels: list[str]) -> int:
    """Show numbered options and return the zero-based index picked."""
    click.secho(message, bold=True)
    for n, label in enumerate(labels, start=1):
        click.echo(f"  {n}) {label}")
    choices = [str(n) for n in range(1, len(labels) + 1)]
    answer = click.prompt(
        "Select", type=click.Choice(choices), default="1", show_choices=False
    )
    return int(answer) - 1


def prompt_for_targets() -> list[Target]:
    """Ask which platform(s) and fields to update."""
    index = _choose(
        "Which platform(s) would you like to update?",
        [label for label, _ in PLATFORM_CHOICES],
    )
    return list(PLATFORM_CHOICES[index][1])


def increment_examples(current_version: str) -> dict[str, str]:
    """Render "old → new" examples for each increment type.

    Falls back to a generic version when ``current_version`` is not a
    plain major.minor.patch string.
    """
    try:
        return {
            kind: f"{current_version} → {bump_version(current_version, kind)}"
            for kind, _, _ in INCREMENT_LABELS
        }
    except FormatError:
        return increment_examples("2.12.0")


def prompt_for_increment(current_version: str = "2.12.0") -> str:
    """Ask which part of the app version to increment."""
    examples = increment_examples(current_version)
    index = _choose(
        "What type of version increment?",
        [f"{name} ({examples[kind]}) - {why}" for kind, name, why in INCREMENT_LABELS],
    )
    return INCREMENT_LABELS[index][0]


def prompt_for_confirmation() -> bool:
    """Ask before any file is modified. Defaults to no."""
    return click.confirm(
        click.style(
            "Are you sure you want to proceed with the version update?", fg="cyan"
        ),
        default=False,
    )
