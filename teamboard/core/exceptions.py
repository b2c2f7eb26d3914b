# teamboard/core/exceptions.py

class BaseAppException(Exception):
    """Базовый класс для всех кастомных исключений приложения."""
    def __init__(self, message: str = "App exception"):
        super().__init__(message)

# ==== Валидация ====

class ValidationError(BaseAppException):
    """Общая ошибка валидации."""
    def __init__(self, message: str = "Validation error"):
        super().__init__(message)

class ProjectValidationError(ValidationError):
    """Ошибка валидации проекта."""
    def __init__(self, message: str = "Project validation error"):
        super().__init__(message)

class UserValidationError(ValidationError):
    """Ошибка валидации пользователя (в т.ч. занятый email)."""
    def __init__(self, message: str = "User validation error"):
        super().__init__(message)

class CalendarEventValidationError(ValidationError):
    """Ошибка валидации события календаря."""
    def __init__(self, message: str = "Calendar event validation error"):
        super().__init__(message)

class QuoteValidationError(ValidationError):
    """Ошибка валидации цитаты."""
    def __init__(self, message: str = "Quote validation error"):
        super().__init__(message)

# ==== NotFound ====

class NotFoundError(BaseAppException):
    """Ошибка отсутствия ресурса."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)

class ProjectNotFound(NotFoundError):
    """Ошибка: проект не найден."""
    def __init__(self, message: str = "Project not found"):
        super().__init__(message)

class UserNotFound(NotFoundError):
    """Ошибка: пользователь не найден."""
    def __init__(self, message: str = "User not found"):
        super().__init__(message)

class MilestoneNotFound(NotFoundError):
    """Ошибка: веха не найдена."""
    def __init__(self, message: str = "Milestone not found"):
        super().__init__(message)

class CommentNotFound(NotFoundError):
    """Ошибка: комментарий не найден."""
    def __init__(self, message: str = "Comment not found"):
        super().__init__(message)

class AssigneeTaskNotFound(NotFoundError):
    """Ошибка: задача исполнителя не найдена."""
    def __init__(self, message: str = "Assignee task not found"):
        super().__init__(message)

class CalendarEventNotFound(NotFoundError):
    """Ошибка: событие календаря не найдено."""
    def __init__(self, message: str = "Calendar event not found"):
        super().__init__(message)

class QuoteNotFound(NotFoundError):
    """Ошибка: цитата не найдена."""
    def __init__(self, message: str = "Quote not found"):
        super().__init__(message)

# ==== Иерархия ====

class InvalidMove(BaseAppException):
    """Ошибка: проект нельзя перенести под себя или под своего потомка."""
    def __init__(self, message: str = "Invalid move"):
        super().__init__(message)

