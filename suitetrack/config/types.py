from dataclasses import dataclass, field

RUNNER_KINDS = ("simulate", "process")
OUTCOMES = ("PASSED", "FAILED", "SKIPPED")


@dataclass(frozen=True)
class SubjectConfig:
    group: str
    name: str
    message: str = "Test executed successfully"
    duration_ms: int = 87
    outcome: str = "PASSED"
    command: str | None = None
    env: dict[str, str] = field(default_factory=dict)
    working_dir: str | None = None

    @property
    def qualified_name(self) -> str:
        if not self.group or self.group == self.name:
            return self.name
        return f"{self.group}.{self.name}"


@dataclass
class CatalogConfig:
    groups: dict[str, list[SubjectConfig]]
    runner: str = "simulate"
    time_scale: float = 1.0

    def __iter__(self):
        # Declared order, not sorted: groups run in the order they were written.
        for group in self.groups:
            yield group, self.groups[group]

    def __len__(self):
        return len(self.groups)

    def has_group(self, group: str) -> bool:
        return group in self.groups

    def group_names(self) -> list[str]:
        return list(self.groups)

    def subject_names(self, group: str) -> list[str]:
        if not self.has_group(group):
            raise KeyError(group)

        return [subject.name for subject in self.groups[group]]

    def find_subject(self, group: str, name: str) -> SubjectConfig | None:
        for subject in self.groups.get(group, []):
            if subject.name == name:
                return subject
        return None

    def total_subjects(self) -> int:
        return sum(len(subjects) for subjects in self.groups.values())


class ConfigError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)


class UnsupportedConfigFormatError(ConfigError):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
