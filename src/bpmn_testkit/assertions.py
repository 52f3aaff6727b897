"""Assertion chains for deployments and process instances.

Assertions are pure reads. :class:`ProcessInstanceAssert` works on a single
:class:`~bpmn_testkit.core.models.InstanceSnapshot`, so every check in one chain
sees the same, consistent state. Fetch the snapshot only after the engine
settled; :meth:`~bpmn_testkit.driver.WorkflowTestDriver.assert_that` does both.

Example:
    >>> (await driver.assert_that(instance)).has_passed_element("EndEvent_HardwareSent").is_completed()
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from bpmn_testkit.core.types import InstanceStatus
from bpmn_testkit.exceptions import DeploymentAssertionError, ProcessAssertionError

if TYPE_CHECKING:
    from bpmn_testkit.core.models import DeploymentEvent, InstanceSnapshot

__all__ = ["DeploymentAssert", "ProcessInstanceAssert"]

_MISSING = object()


class DeploymentAssert:
    """Checks on the confirmation of a deployment command."""

    def __init__(self, deployment: DeploymentEvent) -> None:
        self.deployment = deployment

    def contains_processes_by_bpmn_process_id(self, *bpmn_process_ids: str) -> DeploymentAssert:
        """Assert that every given process id was deployed.

        Raises:
            DeploymentAssertionError: If any id is missing from the deployment.
        """
        deployed = self.deployment.bpmn_process_ids
        missing = [process_id for process_id in bpmn_process_ids if process_id not in deployed]
        if missing:
            raise DeploymentAssertionError(missing, deployed)
        return self


class ProcessInstanceAssert:
    """Fluent checks on one process instance snapshot.

    Every check returns the assert object so checks can be chained. A failing
    check raises :class:`~bpmn_testkit.exceptions.ProcessAssertionError` with the
    expected and the observed state.

    Attributes:
        snapshot: The state all checks run against.
    """

    def __init__(self, snapshot: InstanceSnapshot) -> None:
        self.snapshot = snapshot

    @property
    def _key(self) -> int:
        return self.snapshot.process_instance_key

    def _status_is(self, expected: InstanceStatus, description: str) -> ProcessInstanceAssert:
        if self.snapshot.status != expected:
            raise ProcessAssertionError(self._key, description, expected, self.snapshot.status)
        return self

    def is_started(self) -> ProcessInstanceAssert:
        """Assert that the process was activated."""
        if not self.snapshot.is_started:
            raise ProcessAssertionError(self._key, "should be started", "started", "not started")
        return self

    def is_active(self) -> ProcessInstanceAssert:
        """Assert that the instance has not ended."""
        return self._status_is(InstanceStatus.ACTIVE, "should be active")

    def is_completed(self) -> ProcessInstanceAssert:
        """Assert that the instance reached its end."""
        return self._status_is(InstanceStatus.COMPLETED, "should be completed")

    def is_not_completed(self) -> ProcessInstanceAssert:
        """Assert that the instance has not completed."""
        if self.snapshot.status == InstanceStatus.COMPLETED:
            raise ProcessAssertionError(
                self._key,
                "should not be completed",
                f"not {InstanceStatus.COMPLETED}",
                self.snapshot.status,
            )
        return self

    def is_terminated(self) -> ProcessInstanceAssert:
        """Assert that the instance was terminated."""
        return self._status_is(InstanceStatus.TERMINATED, "should be terminated")

    def is_waiting_at_elements(self, *element_ids: str) -> ProcessInstanceAssert:
        """Assert that the set of elements holding a token is exactly ``element_ids``."""
        expected = set(element_ids)
        actual = set(self.snapshot.active_elements)
        if actual != expected:
            raise ProcessAssertionError(
                self._key,
                "should be waiting at exactly these elements",
                sorted(expected),
                sorted(actual),
            )
        return self

    def is_not_waiting_at_elements(self, *element_ids: str) -> ProcessInstanceAssert:
        """Assert that none of ``element_ids`` holds a token."""
        waiting = sorted(set(element_ids) & set(self.snapshot.active_elements))
        if waiting:
            raise ProcessAssertionError(
                self._key,
                "should not be waiting at these elements",
                [],
                waiting,
            )
        return self

    def has_passed_element(self, element_id: str, times: int | None = None) -> ProcessInstanceAssert:
        """Assert that ``element_id`` completed, at least once or exactly ``times`` times.

        Passing means the element completed somewhere in the history, regardless of
        where the instance is now. An element that was activated and is still
        waiting has not been passed.
        """
        passed = self.snapshot.times_passed(element_id)
        if times is None and passed == 0:
            raise ProcessAssertionError(
                self._key,
                f"should have passed element '{element_id}'",
                "at least once",
                self.snapshot.passed_elements(),
            )
        if times is not None and passed != times:
            raise ProcessAssertionError(
                self._key,
                f"should have passed element '{element_id}' {times} time(s)",
                times,
                passed,
            )
        return self

    def has_not_passed_element(self, element_id: str) -> ProcessInstanceAssert:
        """Assert that ``element_id`` never completed."""
        if self.snapshot.has_passed(element_id):
            raise ProcessAssertionError(
                self._key,
                f"should not have passed element '{element_id}'",
                "never",
                self.snapshot.passed_elements(),
            )
        return self

    def has_passed_elements_in_order(self, *element_ids: str) -> ProcessInstanceAssert:
        """Assert that ``element_ids`` completed in this relative order."""
        passed = self.snapshot.passed_elements()
        remaining = iter(passed)
        if not all(element_id in remaining for element_id in element_ids):
            raise ProcessAssertionError(
                self._key,
                "should have passed elements in order",
                list(element_ids),
                passed,
            )
        return self

    def has_variable(self, name: str) -> ProcessInstanceAssert:
        """Assert that the variable scope holds ``name``."""
        if name not in self.snapshot.variables:
            raise ProcessAssertionError(
                self._key,
                f"should have variable '{name}'",
                name,
                sorted(self.snapshot.variables),
            )
        return self

    def has_variable_with_value(self, name: str, value: Any) -> ProcessInstanceAssert:
        """Assert that variable ``name`` equals ``value``."""
        actual = self.snapshot.variables.get(name, _MISSING)
        if actual is _MISSING:
            raise ProcessAssertionError(
                self._key,
                f"should have variable '{name}'",
                value,
                f"<no variable; scope holds {sorted(self.snapshot.variables)}>",
            )
        if actual != value:
            raise ProcessAssertionError(self._key, f"variable '{name}' has unexpected value", value, actual)
        return self

    def has_no_incidents(self) -> ProcessInstanceAssert:
        """Assert that the instance has no open incident."""
        if self.snapshot.incidents:
            raise ProcessAssertionError(self._key, "should have no incidents", [], list(self.snapshot.incidents))
        return self

    def has_any_incidents(self) -> ProcessInstanceAssert:
        """Assert that the instance has at least one open incident."""
        if not self.snapshot.incidents:
            raise ProcessAssertionError(self._key, "should have incidents", "at least one", [])
        return self
