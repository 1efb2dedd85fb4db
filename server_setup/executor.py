"""Walks the component list and decides, per component, whether to run it."""

import logging
from typing import List, Sequence, Tuple

from server_setup.components.base import Component, SetupContext

logger = logging.getLogger(__name__)


def decide(ctx: SetupContext, component: Component) -> Tuple[bool, bool]:
    """
    Decide whether ``component`` runs.

    Returns (run, rerun). rerun is True when the tool was already present and
    the user (or the CLI defaults) chose to run the step again.
    """
    notice = component.check(ctx) if component.check else None
    if notice:
        ctx.warning(notice)
        if component.rerun_prompt is None:
            return False, False
        rerun = ctx.confirm(
            component.rerun_prompt, unattended=component.rerun_unattended(ctx.run)
        )
        return rerun, rerun

    if ctx.interactive and not ctx.prompter.confirm(component.prompt):
        ctx.warning(f"Skipped {component.title}")
        return False, False
    return True, False


def run_components(ctx: SetupContext, components: Sequence[Component]) -> List[str]:
    """
    Run components in order and return the names of those that ran.

    Any failing external command propagates and stops the loop.
    """
    ran: List[str] = []
    for component in components:
        if not ctx.interactive and not ctx.run.is_selected(component.name):
            logger.debug(f"Skipping {component.name}: not selected")
            continue

        ctx.section(component.title)
        run, rerun = decide(ctx, component)
        if not run:
            continue

        logger.info(f"Running component {component.name} (rerun={rerun})")
        component.action(ctx, rerun)
        ran.append(component.name)
    return ran
