"""Service layer modules."""

from bizdesk.services.attachment_binding_service import (
    bind_files_to_custom_fields,
    count_attachments,
    sanitize_custom_fields,
)
from bizdesk.services.template_service import (
    build_variable_map,
    render_template_variables,
)
from bizdesk.services import (
    attachment_storage_service,
    automation_service,
    template_service,
)

__all__ = [
    # Attachment binding
    "bind_files_to_custom_fields",
    "count_attachments",
    "sanitize_custom_fields",
    # Template rendering
    "build_variable_map",
    "render_template_variables",
    # Service modules
    "attachment_storage_service",
    "automation_service",
    "template_service",
]
