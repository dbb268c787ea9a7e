"""Course configuration errors."""


class CourseError(Exception):
    """Base course configuration error."""
    pass


class ConfigurationNotFound(CourseError):
    """No course is registered under the requested identifier."""

    def __init__(self, course_id: str):
        self.course_id = course_id
        super().__init__(f"Race configuration not found for id: {course_id}")


class InvalidCourseError(CourseError):
    """Course definition cannot be used for split calculation."""
    pass
