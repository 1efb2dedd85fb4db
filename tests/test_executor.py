"""Tests for the per-component decision layer."""

from typing import List, Optional, Tuple

from server_setup.components import COMPONENTS, get_component
from server_setup.components.base import Component, SetupContext
from server_setup.config import RunConfig
from server_setup.executor import decide, run_components
from tests.fakes.context import make_context, output_of
from tests.fakes.runner import FakeCommandRunner


class Recorder:
    """Collects (component name, rerun) pairs from fake actions."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, bool]] = []

    def component(
        self,
        name: str,
        notice: Optional[str] = None,
        rerun_prompt: Optional[str] = None,
    ) -> Component:
        def action(ctx: SetupContext, rerun: bool) -> None:
            self.calls.append((name, rerun))

        return Component(
            name=name,
            title=name.title(),
            prompt=f"Install {name}?",
            action=action,
            help=name,
            check=(lambda ctx: notice) if notice else None,
            rerun_prompt=rerun_prompt,
        )


def cli(*names: str) -> RunConfig:
    return RunConfig(selected=frozenset(names), interactive=False)


class TestRunComponents:
    """Tests for run_components."""

    def test_cli_mode_runs_only_selected_in_order(self, config) -> None:
        rec = Recorder()
        components = [rec.component(n) for n in ("a", "b", "c")]
        ctx = make_context(config, run=cli("c", "a"))

        ran = run_components(ctx, components)

        assert ran == ["a", "c"]
        assert rec.calls == [("a", False), ("c", False)]

    def test_cli_mode_never_prompts(self, config) -> None:
        rec = Recorder()
        ctx = make_context(config, run=cli("a"))
        run_components(ctx, [rec.component("a")])
        assert "Install a?" not in output_of(ctx.console)

    def test_unselected_components_print_nothing(self, config) -> None:
        rec = Recorder()
        ctx = make_context(config, run=cli("a"))
        run_components(ctx, [rec.component("a"), rec.component("b")])
        assert "B" not in output_of(ctx.console).split()

    def test_interactive_asks_each_component(self, config) -> None:
        rec = Recorder()
        ctx = make_context(config, answers="y\nn\nyes\n")
        components = [rec.component(n) for n in ("a", "b", "c")]

        ran = run_components(ctx, components)

        assert ran == ["a", "c"]
        output = output_of(ctx.console)
        assert "Install b?" in output
        assert "Skipped B" in output

    def test_interactive_reprompts_until_valid(self, config) -> None:
        rec = Recorder()
        ctx = make_context(config, answers="sure\nY\n")
        assert run_components(ctx, [rec.component("a")]) == ["a"]
        assert "Please answer y or n." in output_of(ctx.console)


class TestAlreadyInstalled:
    """The already-installed path replaces the install question."""

    def test_cli_mode_warns_and_skips(self, config) -> None:
        rec = Recorder()
        component = rec.component(
            "a", notice="A is already installed (1.2.3)", rerun_prompt="Reinstall A?"
        )
        ctx = make_context(config, run=cli("a"))

        assert run_components(ctx, [component]) == []
        assert "A is already installed (1.2.3)" in output_of(ctx.console)

    def test_interactive_rerun_confirmed(self, config) -> None:
        rec = Recorder()
        component = rec.component(
            "a", notice="A is already installed", rerun_prompt="Reinstall A?"
        )
        ctx = make_context(config, answers="y\n")

        assert decide(ctx, component) == (True, True)
        output = output_of(ctx.console)
        assert "Reinstall A?" in output
        assert "Install a?" not in output

    def test_interactive_rerun_declined(self, config) -> None:
        rec = Recorder()
        component = rec.component(
            "a", notice="A is already installed", rerun_prompt="Reinstall A?"
        )
        ctx = make_context(config, answers="n\n")
        assert run_components(ctx, [component]) == []
        assert rec.calls == []

    def test_without_rerun_prompt_skips_silently(self, config) -> None:
        rec = Recorder()
        component = rec.component("a", notice="A exists")
        ctx = make_context(config, answers="")
        assert decide(ctx, component) == (False, False)

    def test_installed_docker_is_not_reinstalled(self, config) -> None:
        runner = FakeCommandRunner(
            config,
            installed=["docker"],
            versions={"docker": "Docker version 24.0.7, build afdd53b\n"},
        )
        ctx = make_context(config, runner=runner, run=cli("docker"))

        assert run_components(ctx, COMPONENTS) == []
        assert (
            "Docker is already installed (Docker version 24.0.7, build afdd53b)"
            in output_of(ctx.console)
        )
        assert not runner.ran("apt-get")

    def test_git_identity_reconfigures_installed_git(self, config) -> None:
        runner = FakeCommandRunner(config, installed=["git"])
        run = RunConfig(
            selected=frozenset({"git"}),
            interactive=False,
            git_name="Ada",
            git_email="ada@example.com",
        )
        ctx = make_context(config, runner=runner, run=run)

        assert run_components(ctx, [get_component("git")]) == ["git"]
        assert not runner.ran("apt-get")
        assert runner.ran("git", "config", "--global", "user.name", "Ada")
