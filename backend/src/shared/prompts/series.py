"""
Series Framing

Multi-post series (posts_per_platform > 1) give each post a role:

    series_total = 2:   [1 teaser] [2 conclusion]
    series_total = 3:   [1 teaser] [2 context] [3 conclusion]

Later posts also see a short summary of the posts before them.
"""

from typing import Iterable, Protocol


PREVIOUS_POST_EXCERPT_CHARS = 220


class _SeriesPost(Protocol):
    series_index: int
    content: str


def get_series_role(series_index: int, series_total: int) -> str:
    """Role name for a post, or "" outside a series."""
    if series_total <= 1:
        return ""
    if series_index <= 1:
        return "teaser"
    if series_index >= series_total:
        return "conclusion"
    return "context"


def get_series_context(series_index: int, series_total: int) -> str:
    """
    Role-specific instructions for one post of a series.

    Args:
        series_index: 1-based position of the post
        series_total: Number of posts on this platform

    Returns:
        Instruction block, or "" when series_total <= 1
    """
    role = get_series_role(series_index, series_total)
    if not role:
        return ""

    if role == "teaser":
        return f"""You are creating POST 1 of {series_total} in a series.

RULES FOR THIS POST:
- Create intrigue and curiosity.
- Present the problem or topic without revealing the conclusion.
- Open with a hook and end with a question or cliffhanger.
- You may mention "Part 1 of {series_total}".
- Do not include the main call to action yet."""

    if role == "context":
        return f"""You are creating POST {series_index} of {series_total} in a series.

RULES FOR THIS POST:
- Build on the intrigue of the earlier posts without repeating them.
- Add context, details, data or a framework.
- Still do not reveal the final conclusion.
- You may mention "Part {series_index} of {series_total}".
- Do not include the main call to action yet."""

    return f"""You are creating the FINAL post (Post {series_index} of {series_total}) in this series.

RULES FOR THIS POST:
- Deliver the payoff of the earlier posts.
- Give the complete solution or conclusion with actionable takeaways.
- Briefly recap what the series covered.
- End with a strong call to action.
- You may mention "Part {series_index} of {series_total}" or "Final post in series"."""


def build_previous_posts_summary(outputs: Iterable[_SeriesPost]) -> str:
    """
    Summary block of earlier posts in a series.

    Each post is cut to its first 220 characters ("..." marks the cut).

    Returns:
        "PREVIOUS POSTS IN THIS SERIES:" block, or "" when there are none
    """
    lines = []
    for output in sorted(outputs, key=lambda o: o.series_index):
        excerpt = output.content[:PREVIOUS_POST_EXCERPT_CHARS].strip()
        if len(output.content) > PREVIOUS_POST_EXCERPT_CHARS:
            excerpt += "..."
        lines.append(f"Post {output.series_index}: {excerpt}")

    if not lines:
        return ""
    return (
        "PREVIOUS POSTS IN THIS SERIES:\n"
        + "\n\n".join(lines)
        + "\n\nYour post should build on these without repeating them."
    )
