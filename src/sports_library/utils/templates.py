"""
Loading of the bundled templates and import/export of running plans as JSON.

A running plan template looks like:

    {
      "name": "Start running",
      "remarks": "Run 30 minutes without a break after 7 weeks",
      "order_number": 1,
      "running_entries": [
        {"week": 1, "day": 1, "running_units": ["1", "L", "2", "P"]}
      ]
    }

The running units of an entry alternate between a duration in minutes and
the key of a movement type.
"""

import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from sports_library.constants import (
    MOVEMENT_TYPES_JSON,
    RUNNING_PLAN_TEMPLATE_INDEX_JSON,
    TRAINING_TYPES_JSON,
)
from sports_library.exceptions import TemplateError
from sports_library.models import (
    MovementType,
    RunningPlan,
    RunningPlanEntry,
    RunningUnit,
    TrainingType,
)

logger = logging.getLogger(__name__)

TEMPLATE_PACKAGE = "sports_library.templates"


class RunningPlanTemplateEntry(BaseModel):
    """A day of a running plan template."""

    week: int = 1
    day: int = 1
    running_units: list[str] = Field(default_factory=list)


class RunningPlanTemplate(BaseModel):
    """A running plan as stored in a template file."""

    name: str
    remarks: str = ""
    order_number: int = 0
    running_entries: list[RunningPlanTemplateEntry] = Field(default_factory=list)


class RunningPlanTemplateFile(BaseModel):
    """An entry of the template index."""

    file_name: str


class TemplateLoader:
    """
    Creates objects from template files and adds them to a library.

    The library can be anything offering add() and find_all(), usually a
    SportsLibrary or a DataRepository.
    """

    def __init__(self, library: Any):
        self.library = library

    def add_all_from_json(self) -> None:
        """Add the bundled movement types, training types and running plan templates."""
        self.add_from_json(MovementType)
        self.add_from_json(TrainingType)
        self.add_from_json(RunningPlan)

    def add_from_json(self, entity_type: type) -> None:
        """
        Add all bundled templates of one type.

        Args:
            entity_type: MovementType, TrainingType or RunningPlan
        """
        if entity_type is MovementType:
            entities = self.load_movement_types()
        elif entity_type is TrainingType:
            entities = self.load_training_types()
        elif entity_type is RunningPlan:
            entities = self.load_running_plan_templates()
        else:
            raise TemplateError(
                f"There are no templates for {entity_type.__name__}",
                {"entity_type": entity_type.__name__},
            )
        for entity in entities:
            self.library.add(entity)
        logger.debug("Added %d %s templates", len(entities), entity_type.__name__)

    def load_movement_types(self) -> list[MovementType]:
        data = _read_resource_json(MOVEMENT_TYPES_JSON)
        try:
            return [MovementType.model_validate(item) for item in data]
        except (ValidationError, TypeError) as err:
            raise TemplateError(f"Invalid movement type template: {err}") from err

    def load_training_types(self) -> list[TrainingType]:
        data = _read_resource_json(TRAINING_TYPES_JSON)
        try:
            return [TrainingType.model_validate(item) for item in data]
        except (ValidationError, TypeError) as err:
            raise TemplateError(f"Invalid training type template: {err}") from err

    def load_running_plan_templates(self) -> list[RunningPlan]:
        """Build one running plan per file listed in the template index."""
        data = _read_resource_json(RUNNING_PLAN_TEMPLATE_INDEX_JSON)
        try:
            files = [RunningPlanTemplateFile.model_validate(item) for item in data]
        except (ValidationError, TypeError) as err:
            raise TemplateError(f"Invalid template index: {err}") from err

        plans = []
        for template_file in files:
            template = _parse_template(
                _read_resource_text(template_file.file_name), template_file.file_name
            )
            plan = self.build_running_plan(template)
            plan.is_template = True
            plans.append(plan)
        return plans

    def load_running_plan_from_json(self, json_file: str | Path) -> RunningPlan:
        """
        Create a running plan from a template file.

        Args:
            json_file: Path to the template

        Returns:
            The running plan, not yet added to the library
        """
        path = Path(json_file)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as err:
            raise TemplateError(f"Could not read {path}", {"path": str(path)}) from err
        return self.build_running_plan(_parse_template(text, str(path)))

    def import_running_plan_from_json(self, json_file: str | Path) -> RunningPlan:
        """Create a running plan from a template file and add it after all stored plans."""
        plan = self.load_running_plan_from_json(json_file)
        plan.order_number = len(self.library.find_all(RunningPlan)) + 1
        self.library.add(plan)
        return plan

    def export_running_plan_to_json(self, plan: RunningPlan, json_file: str | Path) -> None:
        """Save a running plan in the template format."""
        path = Path(json_file)
        if path.is_dir():
            raise TemplateError(f"{path} is a directory", {"path": str(path)})
        template = RunningPlanTemplate(
            name=plan.name,
            remarks=plan.remarks,
            order_number=plan.order_number,
            running_entries=[
                RunningPlanTemplateEntry(
                    week=entry.week,
                    day=entry.day,
                    running_units=[
                        value
                        for unit in entry.running_units
                        for value in (str(unit.duration), unit.movement_type.key)
                    ],
                )
                for entry in sorted(plan.entries)
            ],
        )
        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(template.model_dump(), f, indent=2, ensure_ascii=False)
        except OSError as err:
            raise TemplateError(f"Could not write {path}", {"path": str(path)}) from err

    @staticmethod
    def is_valid_template(json_file: str | Path) -> bool:
        """Check whether a file holds a running plan template."""
        try:
            RunningPlanTemplate.model_validate_json(Path(json_file).read_text(encoding="utf-8"))
        except (OSError, ValidationError) as err:
            logger.debug("%s is not a valid template: %s", json_file, err)
            return False
        return True

    def build_running_plan(self, template: RunningPlanTemplate) -> RunningPlan:
        """Create a running plan, resolving movement type keys against the library."""
        movement_types = {
            movement_type.key.upper(): movement_type
            for movement_type in self.library.find_all(MovementType)
        }
        if not movement_types:
            raise TemplateError("There are no movement types in the library")

        entries = []
        for template_entry in template.running_entries:
            entry = RunningPlanEntry(week=template_entry.week, day=template_entry.day)
            values = template_entry.running_units
            for duration_str, key in zip(values[0::2], values[1::2]):
                movement_type = movement_types.get(key.upper())
                if movement_type is None:
                    raise TemplateError(
                        f"Unknown movement type {key} in running plan {template.name}",
                        {"movement_type": key, "running_plan": template.name},
                    )
                entry.add_running_unit(
                    RunningUnit(duration=_parse_duration(duration_str), movement_type=movement_type)
                )
            entries.append(entry)

        return RunningPlan(
            name=template.name,
            remarks=template.remarks or "No description available.",
            order_number=template.order_number,
            entries=entries,
        )


def _parse_duration(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        logger.debug("Invalid duration %r in template, using 0", value)
        return 0


def _parse_template(text: str, source: str) -> RunningPlanTemplate:
    try:
        return RunningPlanTemplate.model_validate_json(text)
    except ValidationError as err:
        raise TemplateError(
            f"Invalid running plan template {source}: {err}", {"source": source}
        ) from err


def _read_resource_text(name: str) -> str:
    try:
        return resources.files(TEMPLATE_PACKAGE).joinpath(name).read_text(encoding="utf-8")
    except OSError as err:
        raise TemplateError(f"Missing template resource {name}", {"resource": name}) from err


def _read_resource_json(name: str) -> Any:
    try:
        return json.loads(_read_resource_text(name))
    except json.JSONDecodeError as err:
        raise TemplateError(f"Invalid JSON in template resource {name}", {"resource": name}) from err
