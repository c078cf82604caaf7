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

"""Tests for manifest assembly, writing, and freshness checks."""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from agents_manifest import (
    MANIFEST_VERSION,
    ManifestConfig,
    ManifestFormatError,
    ManifestWriteError,
    build_manifest,
    generate_manifest,
    load_manifest,
    manifest_is_current,
    render_manifest,
    write_manifest,
)
from agents_manifest.clock import FixedClock

type AssetTree = Callable[[Mapping[str, str | bytes]], Path]

_BUNDLE: dict[str, str | bytes] = {
    "assets/agents/.gitkeep": "",
    "assets/agents/docs-researcher.md": "# Docs researcher\n",
    "assets/agents/unknown-agent.md": "# Unknown\n",
    "assets/docs/.gitkeep": "",
    "assets/docs/bun-react-setup.md": "# Bun + React\n",
    "assets/docs/misc-notes.md": "notes",
    "assets/reference_code/.gitkeep": "",
    "assets/reference_code/demo-project/src/server.ts": "export {};\n",
    "assets/reference_code/demo-project/package.json": "{}\n",
    "assets/reference_code/loose-file.ts": "const a = 1;\n",
}


def test_build_manifest_collects_all_categories(
    asset_tree: AssetTree, fixed_clock: FixedClock
) -> None:
    root = asset_tree(_BUNDLE)

    manifest = build_manifest(root, clock=fixed_clock)

    assert manifest.version == MANIFEST_VERSION == "1.0.0"
    assert manifest.generated == fixed_clock.utcnow()
    assert sorted(agent.filename for agent in manifest.agents) == [
        "docs-researcher.md",
        "unknown-agent.md",
    ]
    assert sorted(doc.filename for doc in manifest.docs) == [
        "bun-react-setup.md",
        "misc-notes.md",
    ]
    assert [project.name for project in manifest.reference] == ["demo-project"]


def test_build_manifest_is_deterministic(asset_tree: AssetTree) -> None:
    root = asset_tree(_BUNDLE)
    first = build_manifest(root, clock=FixedClock(datetime(2025, 1, 1, tzinfo=UTC)))
    second = build_manifest(
        root, clock=FixedClock(datetime(2025, 1, 1, tzinfo=UTC) + timedelta(hours=1))
    )

    assert first.agents == second.agents
    assert first.docs == second.docs
    assert first.reference == second.reference
    assert first.same_assets(second)
    assert first.generated != second.generated


def test_build_manifest_never_includes_hidden_files(asset_tree: AssetTree) -> None:
    manifest = build_manifest(asset_tree(_BUNDLE))

    names = [
        *(entry.filename for entry in manifest.agents),
        *(entry.filename for entry in manifest.docs),
        *(project.name for project in manifest.reference),
    ]
    assert ".gitkeep" not in names


def test_build_manifest_with_missing_directories(tmp_path: Path) -> None:
    manifest = build_manifest(tmp_path)

    assert manifest.agents == ()
    assert manifest.docs == ()
    assert manifest.reference == ()


def test_build_manifest_honours_configured_directories(
    asset_tree: AssetTree,
) -> None:
    root = asset_tree({"content/prompts/task-planner.md": "plan"})
    config = ManifestConfig(
        source_root=root,
        output_path=root / "manifest.json",
        agents_dir=Path("content/prompts"),
    )

    manifest = build_manifest(config)

    assert [agent.description for agent in manifest.agents] == [
        "Plan complex TypeScript development tasks"
    ]


def test_render_manifest_matches_wire_shape(
    asset_tree: AssetTree, fixed_clock: FixedClock
) -> None:
    root = asset_tree(
        {
            "assets/agents/system-architect.md": "abc",
            "assets/docs/bun-react-setup.md": "abcd",
            "assets/reference_code/demo-project/package.json": "{}",
        }
    )

    rendered = render_manifest(build_manifest(root, clock=fixed_clock))

    assert json.loads(rendered) == {
        "version": "1.0.0",
        "generated": "2025-01-02T03:04:05.678Z",
        "agents": [
            {
                "name": "system-architect",
                "filename": "system-architect.md",
                "size": 3,
                "description": "Design and architect applications",
            }
        ],
        "docs": [
            {
                "name": "bun-react-setup",
                "filename": "bun-react-setup.md",
                "size": 4,
                "description": "bun react setup",
                "category": "Bun",
            }
        ],
        "reference": [
            {
                "name": "demo-project",
                "files": ["package.json"],
                "description": "demo project",
            }
        ],
    }
    assert rendered.startswith('{\n  "version": "1.0.0",\n  "generated"')
    assert list(json.loads(rendered)["docs"][0]) == [
        "name",
        "filename",
        "size",
        "description",
        "category",
    ]


def test_render_manifest_empty_collections(
    tmp_path: Path, fixed_clock: FixedClock
) -> None:
    rendered = render_manifest(build_manifest(tmp_path, clock=fixed_clock))

    assert '"agents": []' in rendered
    assert '"reference": []' in rendered


def test_generate_manifest_writes_output(
    asset_tree: AssetTree, fixed_clock: FixedClock
) -> None:
    root = asset_tree(_BUNDLE)
    config = ManifestConfig.for_root(root)

    manifest = generate_manifest(config, clock=fixed_clock)

    output = root / "manifest.json"
    assert output.read_text(encoding="utf-8") == render_manifest(manifest)
    assert load_manifest(output) == manifest


def test_generate_manifest_overwrites_existing_file(
    asset_tree: AssetTree, fixed_clock: FixedClock
) -> None:
    root = asset_tree(_BUNDLE)
    output = root / "manifest.json"
    _ = output.write_text("stale content that is longer than nothing" * 100)

    _ = generate_manifest(ManifestConfig.for_root(root), clock=fixed_clock)

    assert json.loads(output.read_text(encoding="utf-8"))["version"] == "1.0.0"


def test_generate_manifest_without_reference_directory(
    asset_tree: AssetTree,
) -> None:
    root = asset_tree({"assets/agents/task-planner.md": "plan"})

    manifest = generate_manifest(ManifestConfig.for_root(root))

    written = json.loads((root / "manifest.json").read_text(encoding="utf-8"))
    assert manifest.reference == ()
    assert written["reference"] == []
    assert written["docs"] == []
    assert len(written["agents"]) == 1


def test_write_manifest_failure_raises_write_error(
    tmp_path: Path, fixed_clock: FixedClock
) -> None:
    manifest = build_manifest(tmp_path, clock=fixed_clock)
    target = tmp_path / "missing-dir" / "manifest.json"

    with pytest.raises(ManifestWriteError) as excinfo:
        _ = write_manifest(manifest, target)

    assert isinstance(excinfo.value, OSError)
    assert str(target) in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)


def test_load_manifest_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "manifest.json"
    _ = path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ManifestFormatError):
        _ = load_manifest(path)


def test_load_manifest_rejects_non_utf8_bytes(tmp_path: Path) -> None:
    path = tmp_path / "manifest.json"
    _ = path.write_bytes(b"\xff\xfe{}")

    with pytest.raises(ManifestFormatError, match="not valid UTF-8"):
        _ = load_manifest(path)


def test_manifest_is_current_after_generation(
    asset_tree: AssetTree, fixed_clock: FixedClock
) -> None:
    root = asset_tree(_BUNDLE)
    config = ManifestConfig.for_root(root)
    _ = generate_manifest(config, clock=fixed_clock)

    later = FixedClock(fixed_clock.utcnow() + timedelta(days=1))
    assert manifest_is_current(config, clock=later)


def test_manifest_is_stale_when_assets_change(
    asset_tree: AssetTree, fixed_clock: FixedClock
) -> None:
    root = asset_tree(_BUNDLE)
    config = ManifestConfig.for_root(root)
    _ = generate_manifest(config, clock=fixed_clock)

    _ = (root / "assets/docs/hono-api.md").write_text("new doc", encoding="utf-8")

    assert not manifest_is_current(config)


def test_manifest_is_stale_when_output_missing_or_malformed(
    asset_tree: AssetTree,
) -> None:
    root = asset_tree(_BUNDLE)
    config = ManifestConfig.for_root(root)

    assert not manifest_is_current(config)

    _ = config.output_path.write_text('{"version": 1}', encoding="utf-8")
    assert not manifest_is_current(config)
