"""Benchmark orchestration around the core resolver."""

from todobench.harness.config import ConfigError, HarnessConfig, TargetConfig, config_from_env, load_words
from todobench.harness.runner import BenchmarkRunner, TargetRunResult, split_target_names
from todobench.harness.scenario import TODO_INPUT_SELECTORS, TodoInputScenario
from todobench.harness.session import BrowserSession, SessionConfig

__all__ = [
    "ConfigError",
    "HarnessConfig",
    "TargetConfig",
    "config_from_env",
    "load_words",
    "BenchmarkRunner",
    "TargetRunResult",
    "split_target_names",
    "TODO_INPUT_SELECTORS",
    "TodoInputScenario",
    "BrowserSession",
    "SessionConfig",
]
