"""
behave hooks: load settings and repositories once, build a fresh scenario
world (actor, test data store, page objects) for every scenario.
"""

from __future__ import annotations

from automation_suite.config import SuiteSettings, ensure_dotenv_loaded
from automation_suite.scenario import Repositories, build_world


def before_all(context):
    ensure_dotenv_loaded()
    context.suite_settings = SuiteSettings.from_env()
    context.repositories = Repositories.load(context.suite_settings)
    print("\n=== Automation Suite ===")
    print(f"Test data: {context.suite_settings.test_data_dir}")
    print(f"Locators: {context.suite_settings.locator_dir}")


def before_scenario(context, scenario):
    world = build_world(context.suite_settings, context.repositories)
    for name, value in vars(world).items():
        setattr(context, name, value)
    print(f"\n[{scenario.feature.name}] {scenario.name}")


def after_scenario(context, scenario):
    if scenario.status.name in {"failed", "error"}:
        print(f"  scenario failed; stored fields: {context.test_data.fields()}")
    actor = getattr(context, "actor", None)
    if actor is not None:
        actor.close()
