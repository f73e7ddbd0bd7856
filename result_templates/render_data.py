"""
The academic-record bundle a template is rendered against.

The host application assembles this from its database (student, class,
session, term, computed results and summary). The renderer only reads
it; nested records stay plain mappings because their shape varies from
school to school.
"""
from collections.abc import Mapping
from dataclasses import dataclass, field


def dig(record, *keys, default=None):
    """
    Walk nested mappings (or attributes) and return the value at ``keys``.

    Returns ``default`` as soon as a step is missing or None, so callers
    never have to guard intermediate levels.

        >>> dig({"student": {"user": {"name": "Ada"}}}, "student", "user", "name")
        'Ada'
    """
    current = record
    for key in keys:
        if current is None:
            return default
        if isinstance(current, Mapping):
            current = current.get(key)
        elif isinstance(current, (list, tuple)) and isinstance(key, int):
            current = current[key] if -len(current) <= key < len(current) else None
        else:
            current = getattr(current, key, None)
    return default if current is None else current


def _mapping(value):
    return value if isinstance(value, Mapping) else {}


def _records(value):
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(item for item in value if isinstance(item, Mapping))


@dataclass(frozen=True)
class RenderData:
    student: Mapping = field(default_factory=dict)
    school: Mapping = field(default_factory=dict)
    student_class: Mapping = field(default_factory=dict)
    academic_session: Mapping = field(default_factory=dict)
    period: Mapping = field(default_factory=dict)
    results: tuple = ()
    grading_scale: tuple = ()
    summary: Mapping = field(default_factory=dict)
    cumulative: Mapping = None
    attendance: Mapping = None

    @classmethod
    def from_dict(cls, payload):
        """Build a bundle from the camelCase JSON payload used by the templates API."""
        if isinstance(payload, cls):
            return payload
        payload = _mapping(payload)
        cumulative = payload.get("cumulative")
        attendance = payload.get("attendance")
        return cls(
            student=_mapping(payload.get("student")),
            school=_mapping(payload.get("school")),
            student_class=_mapping(payload.get("studentClass")),
            academic_session=_mapping(payload.get("academicSession")),
            period=_mapping(payload.get("period")),
            results=_records(payload.get("results")),
            grading_scale=_records(payload.get("gradingScale")),
            summary=_mapping(payload.get("summary")),
            cumulative=cumulative if isinstance(cumulative, Mapping) else None,
            attendance=attendance if isinstance(attendance, Mapping) else None,
        )

    @property
    def first_result(self):
        """The first result row; term-wide comments and trait ratings live here."""
        return self.results[0] if self.results else {}
