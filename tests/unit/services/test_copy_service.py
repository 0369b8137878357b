"""Tests for CopyService business logic."""

import json
from pathlib import Path

from claude_config_manager.models.artifact import (
    AgentCopyRequest,
    CommandCopyRequest,
    HookCopyRequest,
    McpCopyRequest,
    SkillCopyRequest,
)
from claude_config_manager.models.result import ErrorKind
from claude_config_manager.services.copy_service import CopyService

SKILL_MD = "---\nname: pdf\ndescription: Fill in forms\n---\n\nRun scripts/fill.sh\n"


def make_skill(root: Path, name: str = "pdf", skill_md: str = SKILL_MD) -> Path:
    skill_dir = root / "source-skills" / name
    (skill_dir / "scripts").mkdir(parents=True)
    (skill_dir / "SKILL.md").write_text(skill_md, encoding="utf-8")
    (skill_dir / "scripts" / "fill.sh").write_text("#!/bin/sh\n", encoding="utf-8")
    return skill_dir


class TestCopyAgent:
    """Tests for copying agent files."""

    async def test_copy_to_user_scope(
        self, copy_service: CopyService, agent_file: Path, home: Path
    ) -> None:
        """The file is copied byte for byte into ~/.claude/agents."""
        result = await copy_service.copy(
            AgentCopyRequest(source_path=str(agent_file), target_scope="user")
        )

        target = home / ".claude" / "agents" / "reviewer.md"
        assert result.success
        assert result.copied_path == str(target)
        assert result.message == "Agent copied successfully"
        assert target.read_bytes() == agent_file.read_bytes()

    async def test_copy_to_project_scope(
        self,
        copy_service: CopyService,
        agent_file: Path,
        project_dir: Path,
        project_id: str,
    ) -> None:
        result = await copy_service.copy(
            AgentCopyRequest(
                source_path=str(agent_file),
                target_scope="project",
                target_project_id=project_id,
            )
        )

        assert result.success
        assert (project_dir / ".claude" / "agents" / "reviewer.md").exists()

    async def test_conflict_without_strategy(
        self, copy_service: CopyService, agent_file: Path, home: Path
    ) -> None:
        """An existing target is reported and left untouched."""
        target = home / ".claude" / "agents" / "reviewer.md"
        target.parent.mkdir(parents=True)
        target.write_text("existing", encoding="utf-8")

        result = await copy_service.copy(
            AgentCopyRequest(source_path=str(agent_file), target_scope="user")
        )

        assert not result.success
        assert result.conflict is not None
        assert result.conflict.target_path == str(target)
        assert result.conflict.source_modified is not None
        assert target.read_text(encoding="utf-8") == "existing"

    async def test_conflict_overwrite(
        self, copy_service: CopyService, agent_file: Path, home: Path
    ) -> None:
        target = home / ".claude" / "agents" / "reviewer.md"
        target.parent.mkdir(parents=True)
        target.write_text("existing", encoding="utf-8")

        result = await copy_service.copy(
            AgentCopyRequest(
                source_path=str(agent_file), target_scope="user", conflict_strategy="overwrite"
            )
        )

        assert result.success
        assert target.read_bytes() == agent_file.read_bytes()

    async def test_conflict_rename(
        self, copy_service: CopyService, agent_file: Path, home: Path
    ) -> None:
        """Rename writes next to the existing file with a numeric suffix."""
        target = home / ".claude" / "agents" / "reviewer.md"
        target.parent.mkdir(parents=True)
        target.write_text("existing", encoding="utf-8")

        result = await copy_service.copy(
            AgentCopyRequest(
                source_path=str(agent_file), target_scope="user", conflict_strategy="rename"
            )
        )

        renamed = home / ".claude" / "agents" / "reviewer-2.md"
        assert result.success
        assert result.copied_path == str(renamed)
        assert target.read_text(encoding="utf-8") == "existing"
        assert renamed.read_bytes() == agent_file.read_bytes()

    async def test_repeated_rename_counts_up(
        self, copy_service: CopyService, agent_file: Path, home: Path
    ) -> None:
        """Each renamed copy takes the lowest free suffix."""
        request = AgentCopyRequest(
            source_path=str(agent_file), target_scope="user", conflict_strategy="rename"
        )
        first = await copy_service.copy(request)
        copies = [await copy_service.copy(request) for _ in range(3)]

        agents = home / ".claude" / "agents"
        assert first.copied_path == str(agents / "reviewer.md")
        assert [result.copied_path for result in copies] == [
            str(agents / "reviewer-2.md"),
            str(agents / "reviewer-3.md"),
            str(agents / "reviewer-4.md"),
        ]

    async def test_conflict_skip(
        self, copy_service: CopyService, agent_file: Path, home: Path
    ) -> None:
        target = home / ".claude" / "agents" / "reviewer.md"
        target.parent.mkdir(parents=True)
        target.write_text("existing", encoding="utf-8")

        result = await copy_service.copy(
            AgentCopyRequest(
                source_path=str(agent_file), target_scope="user", conflict_strategy="skip"
            )
        )

        assert not result.success
        assert result.skipped
        assert result.message == "Copy cancelled by user"
        assert target.read_text(encoding="utf-8") == "existing"

    async def test_unknown_strategy_only_checked_on_conflict(
        self, copy_service: CopyService, agent_file: Path
    ) -> None:
        """An unknown strategy doesn't matter when there is no conflict."""
        result = await copy_service.copy(
            AgentCopyRequest(
                source_path=str(agent_file), target_scope="user", conflict_strategy="merge"
            )
        )

        assert result.success

    async def test_missing_frontmatter(
        self, copy_service: CopyService, tmp_path: Path, home: Path
    ) -> None:
        source = tmp_path / "plain.md"
        source.write_text("# No frontmatter\n", encoding="utf-8")

        result = await copy_service.copy(
            AgentCopyRequest(source_path=str(source), target_scope="user")
        )

        assert not result.success
        assert result.error_kind is ErrorKind.VALIDATION
        assert result.error is not None
        assert "missing YAML frontmatter" in result.error
        assert not (home / ".claude" / "agents" / "plain.md").exists()

    async def test_malformed_frontmatter(self, copy_service: CopyService, tmp_path: Path) -> None:
        source = tmp_path / "broken.md"
        source.write_text("---\nname: [oops\n---\nbody\n", encoding="utf-8")

        result = await copy_service.copy(
            AgentCopyRequest(source_path=str(source), target_scope="user")
        )

        assert result.error_kind is ErrorKind.VALIDATION
        assert result.error is not None
        assert "malformed YAML frontmatter" in result.error

    async def test_source_not_found(self, copy_service: CopyService, tmp_path: Path) -> None:
        result = await copy_service.copy(
            AgentCopyRequest(source_path=str(tmp_path / "missing.md"), target_scope="user")
        )

        assert result.error_kind is ErrorKind.NOT_FOUND

    async def test_path_traversal(self, copy_service: CopyService) -> None:
        result = await copy_service.copy(
            AgentCopyRequest(source_path="agents/../../secret.md", target_scope="user")
        )

        assert result.error_kind is ErrorKind.SECURITY

    async def test_unknown_project(self, copy_service: CopyService, agent_file: Path) -> None:
        result = await copy_service.copy(
            AgentCopyRequest(
                source_path=str(agent_file), target_scope="project", target_project_id="nope"
            )
        )

        assert result.error_kind is ErrorKind.NOT_FOUND
        assert result.error == "Project not found: nope"


class TestCopyCommand:
    """Tests for copying slash commands."""

    async def test_nested_command_keeps_namespace(
        self, copy_service: CopyService, tmp_path: Path, home: Path
    ) -> None:
        source = tmp_path / "src" / ".claude" / "commands" / "git" / "commit.md"
        source.parent.mkdir(parents=True)
        source.write_text("---\ndescription: Commit\n---\nCommit it.\n", encoding="utf-8")

        result = await copy_service.copy(
            CommandCopyRequest(source_path=str(source), target_scope="user")
        )

        target = home / ".claude" / "commands" / "git" / "commit.md"
        assert result.success
        assert result.message == "Command copied successfully"
        assert result.copied_path == str(target)
        assert target.exists()


class TestCopySkill:
    """Tests for copying skill directories."""

    async def test_copy_skill(self, copy_service: CopyService, tmp_path: Path, home: Path) -> None:
        """The whole directory is copied and counted."""
        source = make_skill(tmp_path)

        result = await copy_service.copy(
            SkillCopyRequest(source_skill_path=str(source), target_scope="user")
        )

        target = home / ".claude" / "skills" / "pdf"
        assert result.success
        assert result.message == "Skill copied successfully"
        assert result.copied_path == str(target)
        assert result.file_count == 2
        assert result.dir_count == 1
        assert (target / "scripts" / "fill.sh").read_text(encoding="utf-8") == "#!/bin/sh\n"
        assert not (home / ".claude" / "skills" / "pdf.tmp").exists()

    async def test_missing_skill_md(self, copy_service: CopyService, tmp_path: Path) -> None:
        source = tmp_path / "empty-skill"
        source.mkdir()

        result = await copy_service.copy(
            SkillCopyRequest(source_skill_path=str(source), target_scope="user")
        )

        assert result.error_kind is ErrorKind.VALIDATION
        assert result.error is not None
        assert "missing SKILL.md" in result.error

    async def test_external_references_require_acknowledgement(
        self, copy_service: CopyService, tmp_path: Path, home: Path
    ) -> None:
        """Nothing is copied until the caller acknowledges the references."""
        source = make_skill(
            tmp_path, skill_md="---\nname: pdf\n---\nUse /usr/local/bin/pdftk\n"
        )

        result = await copy_service.copy(
            SkillCopyRequest(source_skill_path=str(source), target_scope="user")
        )

        assert not result.success
        assert result.requires_acknowledgement
        assert result.external_references is not None
        assert result.external_references[0]["reference"] == "/usr/local/bin/pdftk"
        assert result.external_references[0]["line"] == 4
        assert not (home / ".claude" / "skills" / "pdf").exists()

        acknowledged = await copy_service.copy(
            SkillCopyRequest(
                source_skill_path=str(source), target_scope="user", acknowledged_warnings=True
            )
        )

        assert acknowledged.success
        assert (home / ".claude" / "skills" / "pdf" / "SKILL.md").exists()

    async def test_overwrite_replaces_directory(
        self, copy_service: CopyService, tmp_path: Path, home: Path
    ) -> None:
        """Files only present in the old copy are gone after overwrite."""
        source = make_skill(tmp_path)
        target = home / ".claude" / "skills" / "pdf"
        target.mkdir(parents=True)
        (target / "stale.txt").write_text("old", encoding="utf-8")

        conflicted = await copy_service.copy(
            SkillCopyRequest(source_skill_path=str(source), target_scope="user")
        )
        assert conflicted.conflict is not None

        result = await copy_service.copy(
            SkillCopyRequest(
                source_skill_path=str(source), target_scope="user", conflict_strategy="overwrite"
            )
        )

        assert result.success
        assert not (target / "stale.txt").exists()
        assert (target / "SKILL.md").exists()

    async def test_rename_directory(
        self, copy_service: CopyService, tmp_path: Path, home: Path
    ) -> None:
        source = make_skill(tmp_path)
        (home / ".claude" / "skills" / "pdf").mkdir(parents=True)

        result = await copy_service.copy(
            SkillCopyRequest(
                source_skill_path=str(source), target_scope="user", conflict_strategy="rename"
            )
        )

        assert result.copied_path == str(home / ".claude" / "skills" / "pdf-2")


class TestCopyHook:
    """Tests for merging hooks."""

    async def test_merge_into_new_settings(
        self, copy_service: CopyService, project_dir: Path, project_id: str
    ) -> None:
        result = await copy_service.copy(
            HookCopyRequest(
                source_hook={"event": "PreToolUse", "matcher": "Bash", "command": "lint.sh"},
                target_scope="project",
                target_project_id=project_id,
            )
        )

        settings_path = project_dir / ".claude" / "settings.json"
        assert result.success
        assert result.message == "Hook merged successfully"
        assert result.merged_into == str(settings_path)
        assert result.hook == {"event": "PreToolUse", "matcher": "Bash", "command": "lint.sh"}

        settings = json.loads(settings_path.read_text(encoding="utf-8"))
        assert settings["hooks"]["PreToolUse"][0]["matcher"] == "Bash"
        assert settings["hooks"]["PreToolUse"][0]["hooks"][0]["timeout"] == 60

    async def test_preserves_other_settings(self, copy_service: CopyService, home: Path) -> None:
        settings_path = home / ".claude" / "settings.json"
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(
            json.dumps({"model": "opus", "permissions": {"allow": ["Bash"]}}), encoding="utf-8"
        )

        await copy_service.copy(
            HookCopyRequest(source_hook={"event": "Stop", "command": "notify"}, target_scope="user")
        )

        settings = json.loads(settings_path.read_text(encoding="utf-8"))
        assert list(settings) == ["model", "permissions", "hooks"]

    async def test_duplicate_does_not_rewrite(self, copy_service: CopyService, home: Path) -> None:
        """Merging an existing hook succeeds without touching the file."""
        request = HookCopyRequest(
            source_hook={"event": "Stop", "command": "notify"}, target_scope="user"
        )
        await copy_service.copy(request)
        settings_path = home / ".claude" / "settings.json"
        custom = json.dumps(json.loads(settings_path.read_text(encoding="utf-8")), indent=4)
        settings_path.write_text(custom, encoding="utf-8")

        result = await copy_service.copy(request)

        assert result.success
        assert result.message == "Hook already exists in target settings, no changes made"
        assert settings_path.read_text(encoding="utf-8") == custom

    async def test_matcher_ignored_for_lifecycle_event(
        self, copy_service: CopyService, home: Path
    ) -> None:
        result = await copy_service.copy(
            HookCopyRequest(
                source_hook={"event": "SessionStart", "matcher": "Bash", "command": "setup.sh"},
                target_scope="user",
            )
        )

        assert result.success
        assert result.warnings == [
            'Matcher "Bash" ignored: SessionStart hooks do not support matchers'
        ]
        assert result.hook is not None
        assert result.hook["matcher"] == "*"
        settings = json.loads((home / ".claude" / "settings.json").read_text(encoding="utf-8"))
        assert "matcher" not in settings["hooks"]["SessionStart"][0]

    async def test_invalid_hook(self, copy_service: CopyService) -> None:
        result = await copy_service.copy(
            HookCopyRequest(
                source_hook={"event": "Stop", "command": "x", "timeout": -5},
                target_scope="user",
            )
        )

        assert result.error_kind is ErrorKind.VALIDATION
        assert result.error == "Invalid hook configuration"
        assert result.details == ["Timeout must be a positive integer"]

    async def test_missing_event(self, copy_service: CopyService) -> None:
        result = await copy_service.copy(
            HookCopyRequest(source_hook={"command": "x"}, target_scope="user")
        )

        assert result.error == "Invalid hook configuration: event is required"

    async def test_non_string_event(self, copy_service: CopyService, home: Path) -> None:
        """A list or object event is rejected without touching settings."""
        result = await copy_service.copy(
            HookCopyRequest(
                source_hook={"event": ["PreToolUse"], "command": "x"}, target_scope="user"
            )
        )

        assert result.error_kind is ErrorKind.VALIDATION
        assert result.error == "Invalid hook configuration"
        assert result.details is not None
        assert "Event type must be a string" in result.details
        assert not (home / ".claude" / "settings.json").exists()

    async def test_empty_hook(self, copy_service: CopyService) -> None:
        result = await copy_service.copy(HookCopyRequest(source_hook={}, target_scope="user"))

        assert result.error == "sourceHook is required"


class TestCopyMcp:
    """Tests for copying MCP servers."""

    async def test_copy_to_user_scope(self, copy_service: CopyService, home: Path) -> None:
        """User servers go to ~/.claude.json next to the existing content."""
        claude_json = home / ".claude.json"
        claude_json.write_text(json.dumps({"projects": {}, "numStartups": 3}), encoding="utf-8")

        result = await copy_service.copy(
            McpCopyRequest(
                source_server_name="github",
                source_mcp_config={"command": "npx", "args": ["gh-mcp"]},
                target_scope="user",
            )
        )

        assert result.success
        assert result.message == "MCP server copied successfully"
        assert result.server_name == "github"
        document = json.loads(claude_json.read_text(encoding="utf-8"))
        assert list(document) == ["projects", "numStartups", "mcpServers"]
        assert document["mcpServers"]["github"] == {"command": "npx", "args": ["gh-mcp"]}

    async def test_copy_to_project_scope(
        self, copy_service: CopyService, project_dir: Path, project_id: str
    ) -> None:
        result = await copy_service.copy(
            McpCopyRequest(
                source_server_name="docs",
                source_mcp_config={"type": "http", "url": "https://docs.example.com/mcp"},
                target_scope="project",
                target_project_id=project_id,
            )
        )

        assert result.merged_into == str(project_dir / ".mcp.json")
        document = json.loads((project_dir / ".mcp.json").read_text(encoding="utf-8"))
        assert document["mcpServers"]["docs"]["type"] == "http"

    async def test_conflict_reports_existing_config(
        self, copy_service: CopyService, home: Path
    ) -> None:
        (home / ".claude.json").write_text(
            json.dumps({"mcpServers": {"github": {"command": "old"}}}), encoding="utf-8"
        )

        result = await copy_service.copy(
            McpCopyRequest(
                source_server_name="github",
                source_mcp_config={"command": "new"},
                target_scope="user",
            )
        )

        assert result.conflict is not None
        assert result.conflict.server_name == "github"
        assert result.conflict.existing_config == {"command": "old"}

    async def test_overwrite_migrates_legacy_server(
        self, copy_service: CopyService, project_dir: Path, project_id: str
    ) -> None:
        """A server in .claude/settings.json moves to .mcp.json on overwrite."""
        legacy = project_dir / ".claude" / "settings.json"
        legacy.parent.mkdir()
        legacy.write_text(
            json.dumps({"model": "opus", "mcpServers": {"db": {"command": "old"}}}),
            encoding="utf-8",
        )

        result = await copy_service.copy(
            McpCopyRequest(
                source_server_name="db",
                source_mcp_config={"command": "new"},
                target_scope="project",
                target_project_id=project_id,
                conflict_strategy="overwrite",
            )
        )

        assert result.success
        mcp_json = json.loads((project_dir / ".mcp.json").read_text(encoding="utf-8"))
        assert mcp_json["mcpServers"]["db"] == {"command": "new"}
        assert json.loads(legacy.read_text(encoding="utf-8")) == {"model": "opus"}

    async def test_rename_not_supported(self, copy_service: CopyService, home: Path) -> None:
        (home / ".claude.json").write_text(
            json.dumps({"mcpServers": {"github": {"command": "old"}}}), encoding="utf-8"
        )

        result = await copy_service.copy(
            McpCopyRequest(
                source_server_name="github",
                source_mcp_config={"command": "new"},
                target_scope="user",
                conflict_strategy="rename",
            )
        )

        assert result.error_kind is ErrorKind.VALIDATION
        assert result.error == "Conflict strategy rename is not supported for MCP servers"

    async def test_skip(self, copy_service: CopyService, home: Path) -> None:
        (home / ".claude.json").write_text(
            json.dumps({"mcpServers": {"github": {"command": "old"}}}), encoding="utf-8"
        )

        result = await copy_service.copy(
            McpCopyRequest(
                source_server_name="github",
                source_mcp_config={"command": "new"},
                target_scope="user",
                conflict_strategy="skip",
            )
        )

        assert result.skipped

    async def test_invalid_config(self, copy_service: CopyService) -> None:
        result = await copy_service.copy(
            McpCopyRequest(
                source_server_name="remote",
                source_mcp_config={"type": "http"},
                target_scope="user",
            )
        )

        assert result.error_kind is ErrorKind.VALIDATION
        assert result.error == (
            "Invalid MCP server configuration: url is required for http/sse transport"
        )
        assert result.details == ["url is required for http/sse transport"]

    async def test_invalid_target_json(self, copy_service: CopyService, home: Path) -> None:
        (home / ".claude.json").write_text("{broken", encoding="utf-8")

        result = await copy_service.copy(
            McpCopyRequest(
                source_server_name="github",
                source_mcp_config={"command": "npx"},
                target_scope="user",
            )
        )

        assert result.error_kind is ErrorKind.PARSE

    async def test_project_copy_leaves_settings_json_untouched(
        self, copy_service: CopyService, project_dir: Path, project_id: str
    ) -> None:
        """New project servers go to .mcp.json; settings.json keeps its exact bytes."""
        settings = project_dir / ".claude" / "settings.json"
        settings.parent.mkdir()
        original = b'{\n    "model": "opus",\n    "hooks": {}\n}'
        settings.write_bytes(original)

        result = await copy_service.copy(
            McpCopyRequest(
                source_server_name="docs",
                source_mcp_config={"command": "docs-mcp"},
                target_scope="project",
                target_project_id=project_id,
            )
        )

        assert result.success
        assert (project_dir / ".mcp.json").exists()
        assert settings.read_bytes() == original

    async def test_malformed_local_settings_is_skipped(
        self, copy_service: CopyService, project_dir: Path, project_id: str
    ) -> None:
        """A broken legacy file doesn't block writes to .mcp.json."""
        local_settings = project_dir / ".claude" / "settings.local.json"
        local_settings.parent.mkdir()
        local_settings.write_text("{not json", encoding="utf-8")

        result = await copy_service.copy(
            McpCopyRequest(
                source_server_name="docs",
                source_mcp_config={"command": "docs-mcp"},
                target_scope="project",
                target_project_id=project_id,
            )
        )

        assert result.success
        document = json.loads((project_dir / ".mcp.json").read_text(encoding="utf-8"))
        assert document["mcpServers"]["docs"] == {"command": "docs-mcp"}
        assert local_settings.read_text(encoding="utf-8") == "{not json"
