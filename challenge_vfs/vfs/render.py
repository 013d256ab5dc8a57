"""
Leaf Rendering

Renders a ChallengeRecord as the Markdown document shown when a leaf is
opened. Output depends only on the record.
"""

from __future__ import annotations

from challenge_vfs.types import ChallengeRecord, DirectoryNode

UNKNOWN_AUTHOR = "unknown"


def render_record(record: ChallengeRecord) -> str:
    """
    Render a record as Markdown.

    Layout:
        # {name}
        - metadata list
        ## Description
        ## Description (English), when present
        ## Solutions (numbered, omitted heading body -> "None yet.")
    """
    link = record.external_link or "(invalid link)"
    lines = [f"# {record.name}", ""]
    if record.name_en:
        lines.extend([f"_{record.name_en}_", ""])

    lines.extend([
        f"- id: {record.key}",
        f"- alias: {record.id_alias or '-'}",
        f"- platform: {record.platform}",
        f"- difficulty: {record.difficulty_level}/5",
        f"- tags: {', '.join(record.tags)}",
        f"- link: {link}",
        f"- expired: {'yes' if record.is_expired else 'no'}",
        f"- created: {record.create_time.isoformat(sep=' ')}",
        f"- updated: {record.update_time.isoformat(sep=' ')}",
        "",
        "## Description",
        "",
        record.description.strip() or "No description.",
        "",
    ])
    if record.description_en and record.description_en.strip():
        lines.extend(["## Description (English)", "", record.description_en.strip(), ""])
    lines.extend(["## Solutions", ""])

    if record.solutions:
        for number, solution in enumerate(record.solutions, start=1):
            author = solution.author or UNKNOWN_AUTHOR
            source = f"{solution.source}, " if solution.source else ""
            lines.append(f"{number}. [{solution.title}]({solution.url}) - {source}by {author}")
    else:
        lines.append("None yet.")

    return "\n".join(lines) + "\n"


def leaf_content(node: DirectoryNode) -> str:
    """Content of a leaf: literal content, or the rendered record."""
    if node.content is not None:
        return node.content
    if node.record is None:
        raise ValueError(f"{node.name!r} is not a leaf")
    return render_record(node.record)
