"""
URL configuration for Taskboard project.
"""
from django.contrib import admin
from django.http import Http404
from django.urls import path
from ninja import NinjaAPI
from ninja.errors import HttpError, ValidationError

from apps.core.middleware import handle_exception

api = NinjaAPI(
    title="Taskboard API",
    version="1.0.0",
    description="Personal task management API with JWT authentication",
    docs_url="/docs",
)

# ninja catches these before Django middleware would; reuse the same JSON error shape
api.add_exception_handler(ValidationError, handle_exception)
api.add_exception_handler(HttpError, handle_exception)
api.add_exception_handler(Http404, handle_exception)
api.add_exception_handler(Exception, handle_exception)

from apps.identity.api import router as auth_router
from apps.tasks.api import router as tasks_router

api.add_router("/auth", auth_router)
api.add_router("/tasks", tasks_router)

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', api.urls),
]
