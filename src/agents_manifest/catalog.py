# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Static lookup tables used to describe and classify assets.

Agent descriptions are curated by hand for the agents bundled with the
installer. Documentation categories come from an ordered keyword table where
the first matching rule wins.
"""

from __future__ import annotations

import re

__all__ = [
    "AGENT_DESCRIPTIONS",
    "DEFAULT_CATEGORY",
    "DOC_CATEGORY_RULES",
    "categorize_doc",
    "describe_agent",
    "humanize",
    "strip_extension",
]

AGENT_DESCRIPTIONS: dict[str, str] = {
    "docs-researcher.md": "Research documentation for JS/TS libraries",
    "react-developer.md": "Expert React and Next.js development",
    "system-architect.md": "Design and architect applications",
    "task-breakdown.md": "Break down complex tasks into subtasks",
    "task-documenter.md": "Create comprehensive documentation",
    "task-planner.md": "Plan complex TypeScript development tasks",
    "test-task-planner.md": "Create comprehensive test plans",
    "typescript-code-reviewer.md": "Review TypeScript code quality",
    "typescript-developer.md": "Implement complex TypeScript features",
    "typescript-reference-developer.md": "Generate reference implementations",
    "typescript-test-developer.md": "Generate and maintain tests",
}

# Order matters: a filename matching several keyword groups takes the label
# of the earliest group ("bun-react-setup.md" is "Bun").
DOC_CATEGORY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("claude-code",), "Claude Code"),
    (("bun",), "Bun"),
    (("react", "next"), "React/Next.js"),
    (("typescript", "ts"), "TypeScript"),
    (("test",), "Testing"),
    (("hono", "api"), "API"),
    (("ui", "tailwind", "shadcn"), "UI/Styling"),
    (("orm", "drizzle", "database"), "Database"),
)

DEFAULT_CATEGORY = "General"

_EXTENSION_PATTERN = re.compile(r"\.(md|ts|js|json)$")
_SEPARATOR_PATTERN = re.compile(r"[-_]")


def strip_extension(filename: str) -> str:
    """Remove one trailing ``.md``, ``.ts``, ``.js`` or ``.json`` extension.

    Only the final extension is affected: ``notes.md.json`` becomes
    ``notes.md`` and ``archive.tar`` is returned unchanged.
    """
    return _EXTENSION_PATTERN.sub("", filename, count=1)


def humanize(name: str) -> str:
    """Replace every ``-`` and ``_`` in ``name`` with a space."""
    return _SEPARATOR_PATTERN.sub(" ", name)


def describe_agent(filename: str) -> str:
    """Return the curated description for an agent file.

    The lookup is keyed by the full filename, extension included. Unknown
    agents fall back to :func:`humanize` applied to the stripped name.
    """
    curated = AGENT_DESCRIPTIONS.get(filename)
    if curated:
        return curated
    return humanize(strip_extension(filename))


def categorize_doc(filename: str) -> str:
    """Classify a documentation file by case-sensitive substring matching."""
    for keywords, label in DOC_CATEGORY_RULES:
        if any(keyword in filename for keyword in keywords):
            return label
    return DEFAULT_CATEGORY
