#!/usr/bin/env python3
"""agentready CLI - score repository readiness for AI agents."""

import asyncio
import sys

from pydantic_settings import CliApp, CliSubCommand, get_subcommand

from agentready.command.actions import ActionsCommand
from agentready.command.score import ScoreCommand
from agentready.core.config import State
from agentready.core.log import logger


class CliState(State):
    """Score a repository's maturity for AI-agent collaboration.

    Takes the results of the readiness checks, aggregates them per
    level and per pillar, and derives the achieved level L1-L5 under
    the 80% gate.

    Configuration sources (in priority order):
    1. Command-line arguments (--config.scan.repo value)
    2. --include files, ./agentready.yaml, user config, defaults
    3. .env file
    4. Environment variables (AGENTREADY_CONFIG__SCAN__REPO=value)
    """

    score: CliSubCommand[ScoreCommand]
    actions: CliSubCommand[ActionsCommand]

    def cli_cmd(self):
        """Dispatch to the active subcommand, or show help."""
        subcommand = get_subcommand(self, is_required=False)

        if subcommand is None:
            CliApp.run(CliState, cli_args=['--help'])
            sys.exit(1)

        # Closing the logger flushes file and OTLP sinks
        with logger:
            try:
                exit_code = asyncio.run(subcommand.run_workflow(self))
            except (OSError, ValueError) as e:
                logger.error(f"Scan failed: {e}")
                exit_code = 1
            raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliState)


if __name__ == "__main__":
    main()
