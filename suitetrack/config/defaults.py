from .types import CatalogConfig, SubjectConfig

# group -> (name, message, duration_ms), in run order
_BUILTIN_SUBJECTS: dict[str, list[tuple[str, str, int]]] = {
    "UserServiceTest": [
        ("testGetAllUsers", "Successfully retrieved all users", 45),
        ("testCreateUser", "Successfully created new user", 32),
        ("testGetUserById", "Successfully retrieved user by ID", 28),
        ("testUpdateUser", "Successfully updated user", 41),
        ("testDeleteUser", "Successfully deleted user", 35),
        ("testFindByUsername", "Successfully found user by username", 29),
    ],
    "UserResourceIT": [
        ("testHealthEndpoint", "Health endpoint responding correctly", 156),
        ("testGetAllUsers", "REST API returns all users", 203),
        ("testCreateUser", "REST API creates user successfully", 189),
        ("testGetUserById", "REST API retrieves user by ID", 145),
        ("testDeleteUser", "REST API deletes user successfully", 167),
        ("testSearchByUsername", "REST API searches by username", 134),
        ("testSearchByUsernameNotFound", "REST API handles user not found", 98),
    ],
}


def default_catalog(*, time_scale: float = 1.0) -> CatalogConfig:
    groups = {
        group: [
            SubjectConfig(group, name, message=message, duration_ms=duration_ms)
            for name, message, duration_ms in subjects
        ]
        for group, subjects in _BUILTIN_SUBJECTS.items()
    }
    return CatalogConfig(groups=groups, runner="simulate", time_scale=time_scale)
