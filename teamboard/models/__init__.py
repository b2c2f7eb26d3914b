from .user import User
from .project import Project
from .assignee import ProjectAssignee, AssigneeTask
from .milestone import Milestone
from .comment import Comment
from .calendar import CalendarEvent, CalendarEventAttendee
from .quote import Quote

# новые модели регистрировать здесь
