"""Tests for the completion resolver.

Lines use `|` to mark the cursor position, otherwise the cursor is at the end:

- `tc ` is the minimal line that can be completed (notice the space!)
- `tc comp` means that the cursor is immediately after the word
- `tc --network | compile` completes between `--network` and `compile`
"""

import pytest

from taskcomp.completion import complete as complete_fn
from taskcomp.completion import find_task, previous_token
from taskcomp.environment import EnvironmentLoaded, EnvironmentUnavailable, build_environment


async def complete(line_with_cursor: str, **kwargs) -> set[str]:
    point = line_with_cursor.find("|")
    line = line_with_cursor.replace("|", "")
    return await complete_fn(line, point if point != -1 else len(line), **kwargs)


CORE_TASKS = {"check", "clean", "compile", "console", "flatten", "help", "node", "run", "test"}

CORE_PARAMS = {
    "--network",
    "--show-stack-traces",
    "--version",
    "--help",
    "--emoji",
    "--config",
    "--verbose",
    "--max-memory",
    "--tsconfig",
}


class TestBasicProject:
    """Built-in tasks and default networks only."""

    @pytest.fixture(autouse=True)
    def project(self, use_fixture_project):
        use_fixture_project("basic-project")

    @pytest.mark.asyncio
    async def test_all_tasks_and_global_params(self):
        assert await complete("tc ") == CORE_TASKS | CORE_PARAMS

    @pytest.mark.asyncio
    async def test_partial_param(self):
        assert await complete("tc --") == CORE_TASKS | CORE_PARAMS

    @pytest.mark.asyncio
    async def test_used_flag_not_suggested(self):
        assert await complete("tc --verbose ") == CORE_TASKS | (CORE_PARAMS - {"--verbose"})

    @pytest.mark.asyncio
    async def test_task_flags(self):
        assert await complete("tc compile ") == CORE_PARAMS | {"--force", "--quiet"}

    @pytest.mark.asyncio
    async def test_used_task_and_global_flags_ignored(self):
        suggestions = await complete("tc --verbose compile --quiet ")
        assert suggestions == (CORE_PARAMS - {"--verbose"}) | {"--force"}

    @pytest.mark.asyncio
    async def test_network(self):
        assert await complete("tc --network ") == {"hardhat", "localhost"}

    @pytest.mark.asyncio
    async def test_network_after_task(self):
        assert await complete("tc --verbose compile --force --network ") == {"hardhat", "localhost"}

    @pytest.mark.asyncio
    async def test_tasks_after_global_param(self):
        assert await complete("tc --network localhost ") == CORE_TASKS | (CORE_PARAMS - {"--network"})

    @pytest.mark.asyncio
    async def test_cursor_not_at_the_end(self):
        assert await complete("tc --network | test") == {"hardhat", "localhost"}

    @pytest.mark.asyncio
    async def test_flags_after_the_cursor_are_excluded(self):
        suggestions = await complete("tc | test --verbose")
        assert suggestions == (CORE_PARAMS - {"--verbose"}) | {"--no-compile"}

    @pytest.mark.asyncio
    async def test_cursor_in_a_partial_word(self):
        assert await complete("tc com| --verbose") == CORE_TASKS | (CORE_PARAMS - {"--verbose"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("flag", ["--config", "--max-memory", "--tsconfig"])
    async def test_free_value_param(self, flag):
        assert await complete(f"tc {flag} ") == set()

    @pytest.mark.asyncio
    async def test_free_value_param_after_task(self):
        assert await complete("tc test --config ") == set()

    @pytest.mark.asyncio
    async def test_unknown_flag_is_not_special(self):
        assert await complete("tc --unknown-flag ") == CORE_TASKS | CORE_PARAMS

    @pytest.mark.asyncio
    @pytest.mark.parametrize("flag", ["--network-", "--maxMemory", "--max--memory"])
    async def test_misspelled_value_param(self, flag):
        assert await complete(f"tc {flag} ") == CORE_TASKS | CORE_PARAMS

    @pytest.mark.asyncio
    async def test_misspelled_global_flag_not_used(self):
        assert await complete("tc --showStackTraces ") == CORE_TASKS | CORE_PARAMS

    @pytest.mark.asyncio
    async def test_unknown_task(self):
        assert await complete("tc nope ") == CORE_TASKS | CORE_PARAMS

    @pytest.mark.asyncio
    async def test_task_value_param(self):
        suggestions = await complete("tc node --port 8545 ")
        assert suggestions == CORE_PARAMS | {"--hostname", "--fork", "--fork-block-number"}

    @pytest.mark.asyncio
    async def test_empty_prefix(self):
        assert await complete("|tc ") == CORE_TASKS | CORE_PARAMS

    @pytest.mark.asyncio
    async def test_cursor_out_of_range(self):
        assert await complete_fn("tc --network ", 1000) == {"hardhat", "localhost"}
        assert await complete_fn("tc --network ", -5) == CORE_TASKS | (CORE_PARAMS - {"--network"})


class TestCustomProject:
    """User tasks, namespaced tasks and configured networks."""

    @pytest.fixture(autouse=True)
    def project(self, use_fixture_project):
        use_fixture_project("custom-project")

    @pytest.mark.asyncio
    async def test_user_tasks_listed_without_namespaced_ones(self):
        suggestions = await complete("tc ")
        assert suggestions == CORE_TASKS | {"deploy"} | CORE_PARAMS
        assert "deploy:local" not in suggestions

    @pytest.mark.asyncio
    async def test_networks_from_included_file(self):
        assert await complete("tc deploy --network ") == {"hardhat", "localhost", "sepolia"}

    @pytest.mark.asyncio
    async def test_user_task_flags(self):
        suggestions = await complete("tc deploy --dry-run ")
        assert suggestions == CORE_PARAMS | {"--tag"}

    @pytest.mark.asyncio
    async def test_namespaced_task_flags(self):
        assert await complete("tc deploy:local ") == CORE_PARAMS | {"--reset"}

    @pytest.mark.asyncio
    async def test_overridden_builtin_task(self):
        assert await complete("tc compile ") == CORE_PARAMS | {"--optimize"}


class TestUnavailableEnvironment:
    @pytest.mark.asyncio
    async def test_no_project(self, no_project):
        assert await complete("tc ") == set()
        assert await complete("tc --network ") == set()

    @pytest.mark.asyncio
    async def test_broken_project(self, use_fixture_project):
        use_fixture_project("broken-project")
        assert await complete("tc ") == set()

    @pytest.mark.asyncio
    async def test_injected_loader(self):
        async def loader():
            return EnvironmentUnavailable("nothing here")

        assert await complete("tc ", loader=loader) == set()

    @pytest.mark.asyncio
    async def test_failing_loader(self):
        async def loader():
            raise RuntimeError("boom")

        assert await complete("tc ", loader=loader) == set()


@pytest.mark.asyncio
async def test_injected_environment(test_logger):
    environment = build_environment({"networks": {"mainnet": {"url": "https://example.org"}}}, test_logger)

    async def loader():
        return EnvironmentLoaded(environment)

    assert await complete("tc --network ", loader=loader) == {"hardhat", "localhost", "mainnet"}
    assert await complete("tc --emoji ", loader=loader) == CORE_TASKS | (CORE_PARAMS - {"--emoji"})


class TestFindTask:
    def test_misspelled_global_param_consumes_one_word(self):
        assert find_task(["tc", "--network-", "compile"]) == ("compile", set())

    def test_no_task(self):
        assert find_task(["tc", "--verbose", "--network", "localhost"]) == (None, {"--verbose", "--network"})

    def test_task_after_global_params(self):
        assert find_task(["tc", "--config", "a.toml", "--emoji", "run", "--verbose"]) == ("run", {"--config", "--emoji"})

    def test_task_flags_before_the_task(self):
        assert find_task(["tc", "--quiet", "compile"]) == ("compile", set())

    def test_value_param_at_the_end(self):
        assert find_task(["tc", "--network"]) == (None, {"--network"})

    def test_program_name_only(self):
        assert find_task(["tc"]) == (None, set())


class TestPreviousToken:
    def test_end_of_line(self):
        assert previous_token("tc --network ", 13) == "--network"

    def test_partial_word(self):
        assert previous_token("tc comp", 7) == "comp"

    def test_middle_of_line(self):
        assert previous_token("tc --network  test", 13) == "--network"

    def test_nothing_before_cursor(self):
        assert previous_token("  tc", 1) is None
