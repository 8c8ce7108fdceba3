"""
Entry point of the sports library.

SportsLibrary ties the library directory, logging, the datastore and the
repository together. On the first start it fills the datastore with the
bundled templates and creates the user of the library.
"""

import logging
from pathlib import Path
from typing import Any, Optional, TypeVar

from sports_library.constants import LIBRARY_PACKAGE_NAME
from sports_library.models import (
    UUID,
    MovementType,
    PersistentObject,
    RunningPlan,
    Training,
    TrainingType,
    User,
)
from sports_library.storage import (
    DatabaseManager,
    DataRepository,
    DatastoreDelegate,
    initialize_library_directory,
)
from sports_library.utils.dates import today
from sports_library.utils.log import LogContent, get_log_content, setup_logging, shutdown_logging
from sports_library.utils.templates import TemplateLoader

logger = logging.getLogger(__name__)

P = TypeVar("P", bound=PersistentObject)


class SportsLibrary:
    """
    Access to all data of the library.

    Use get_instance() for the process-wide library, or construct a
    SportsLibrary directly to work with an explicit handle.
    """

    _instance: Optional["SportsLibrary"] = None

    def __init__(
        self,
        debug_mode: bool = False,
        library_dir: str | Path | None = None,
        package_name: str = LIBRARY_PACKAGE_NAME,
        delegates: Optional[list[DatastoreDelegate]] = None,
    ):
        """
        Open the library, importing the templates on the first start.

        Args:
            debug_mode: Write debug messages into the log file
            library_dir: Directory of the library, defaults to the configured one
            package_name: Name used for the default directory and the datastore file
            delegates: Observers notified about changes
        """
        self.debug_mode = debug_mode
        self.package_name = package_name
        self.library_dir = initialize_library_directory(package_name, library_dir)
        setup_logging(self.library_dir, debug_mode)

        self.datastore = DatabaseManager(self.library_dir, package_name)
        self.datastore.open()
        self.repository = DataRepository(self.datastore, delegates)

        if self._is_first_start():
            logger.debug("Empty datastore in %s, importing templates", self.library_dir)
            TemplateLoader(self).add_all_from_json()

        self.app_user = self._load_app_user()

    @classmethod
    def get_instance(
        cls, debug_mode: bool = False, library_dir: str | Path | None = None
    ) -> "SportsLibrary":
        """Get the process-wide library, creating it on first access."""
        if cls._instance is None:
            cls._instance = cls(debug_mode=debug_mode, library_dir=library_dir)
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Close and forget the process-wide library."""
        if cls._instance is not None:
            cls._instance.close()
        cls._instance = None

    def is_debug_mode(self) -> bool:
        return self.debug_mode

    def get_log_content(self) -> list[LogContent]:
        return get_log_content(self.library_dir)

    def add_delegate(self, delegate: DatastoreDelegate) -> None:
        if delegate not in self.repository.delegates:
            self.repository.delegates.append(delegate)

    def remove_delegate(self, delegate: DatastoreDelegate) -> None:
        if delegate in self.repository.delegates:
            self.repository.delegates.remove(delegate)

    def is_open(self) -> bool:
        return self.repository.is_open()

    def add(self, entity: PersistentObject) -> None:
        self.repository.add(entity)

    def update(self, entity: PersistentObject) -> None:
        self.repository.update(entity)

    def delete(self, entity: PersistentObject) -> None:
        self.repository.delete(entity)

    def find_by_uuid(self, entity_type: type[P], uuid: UUID | str) -> Optional[P]:
        return self.repository.find_by_uuid(entity_type, uuid)

    def find_all(self, entity_type: type[P]) -> list[P]:
        return self.repository.find_all(entity_type)

    def find_by_attribute(self, name: str, value: Any, entity_type: type[P]) -> list[P]:
        return self.repository.find_by_attribute(name, value, entity_type)

    def clear_all(self) -> None:
        self.repository.clear_all()

    def close(self) -> None:
        """Write and close the datastore and release the log file."""
        self.datastore.close()
        shutdown_logging(self.library_dir)

    def get_running_plans(self) -> list[RunningPlan]:
        """
        Get all running plans ordered by their order number.

        Plans that are not active and whose start date has passed get a new
        start date, which is saved.
        """
        plans = sorted(self.find_all(RunningPlan))
        for plan in plans:
            if not plan.is_active() and plan.start_date < today():
                plan.adjust_start_date()
                self.update(plan)
        return plans

    def get_trainings(self) -> list[Training]:
        return sorted(self.find_all(Training))

    def get_movement_types(self) -> list[MovementType]:
        return self.find_all(MovementType)

    def get_uuid_for_training_type(self, name: str) -> Optional[UUID]:
        """Get the identifier of the training type with the name, None if absent or ambiguous."""
        training_type = self.repository.find_unique_by_attribute("name", name, TrainingType)
        return training_type.get_uuid() if training_type is not None else None

    def get_active_running_plan(self) -> Optional[RunningPlan]:
        uuid = self.app_user.get_active_running_plan_uuid()
        if uuid is None:
            return None
        return self.find_by_uuid(RunningPlan, uuid)

    def set_active_running_plan(self, plan: Optional[RunningPlan]) -> None:
        self.app_user.set_active_running_plan(plan)
        self.update(self.app_user)

    def export_to_json(self, plan: RunningPlan, json_file: str | Path) -> None:
        """Save a running plan as JSON template."""
        TemplateLoader(self).export_running_plan_to_json(plan, json_file)

    def _is_first_start(self) -> bool:
        return not any(
            self.find_all(entity_type) for entity_type in (MovementType, TrainingType, RunningPlan)
        )

    def _load_app_user(self) -> User:
        users = self.find_all(User)
        if len(users) > 1:
            logger.warning("Found %d users in the datastore, using the first one", len(users))
        if users:
            return users[0]
        user = User()
        self.add(user)
        return user

    def __enter__(self) -> "SportsLibrary":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
