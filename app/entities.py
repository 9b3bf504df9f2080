"""Built-in dashboard entity and form schemas with their list specs."""

from __future__ import annotations

import logging

from app import config
from schema_registry import SchemaRegistry

logger = logging.getLogger("dashkit.registry")

LANGUAGE_OPTIONS = [{"value": "en", "label": "English"}, {"value": "ar", "label": "Arabic"}]
ACTIVE_STATUSES = ["ACTIVE", "INACTIVE"]
PRIORITIES = ["LOW", "MEDIUM", "HIGH"]
PLATFORMS = ["facebook", "instagram", "twitter", "linkedin", "tiktok", "youtube"]
EXPENSE_CATEGORIES = ["Software", "Office", "Travel", "Marketing", "Salaries", "Freelancers", "Other"]

PHONE_PATTERN = r"^[0-9+()\- ]{10,20}$"
USER_PHONE_PATTERN = r"^\+?[0-9]{10,15}$"

_PASSWORD_PATTERNS = [
    {"regex": "[A-Z]", "message": "Password must contain at least one uppercase letter"},
    {"regex": "[a-z]", "message": "Password must contain at least one lowercase letter"},
    {"regex": "[0-9]", "message": "Password must contain at least one number"},
]

PASSWORDS_MATCH = "Passwords don't match"


def _language(language: str) -> dict:
    return {"id": "language", "type": "enum", "options": LANGUAGE_OPTIONS, "default": language}


def _status(options: list, default: str) -> dict:
    return {"id": "status", "type": "enum", "options": options, "default": default}


def _url(field_id: str, message: str = "Invalid URL", **extra) -> dict:
    return {"id": field_id, "type": "url", "messages": {"INVALID_URL": message}, **extra}


def _ref(field_id: str, label: str, **extra) -> dict:
    return {
        "id": field_id,
        "type": "uuid",
        "label": label,
        "messages": {"INVALID_UUID": f"Invalid {label.lower()} id"},
        **extra,
    }


def _password(field_id: str, max_length: int, message: str = "Password must be at least 8 characters", **extra) -> dict:
    return {
        "id": field_id,
        "type": "string",
        "min_length": 8,
        "max_length": max_length,
        "patterns": _PASSWORD_PATTERNS,
        "trim": False,
        "messages": {"MIN_LENGTH": message, "MAX_LENGTH": "Password is too long"},
        **extra,
    }


def _matching(rule_id: str, left: str, right: str, when: dict | None = None) -> dict:
    rule = {
        "id": rule_id,
        "condition": {"op": "eq", "left": {"ref": f"$record.{left}"}, "right": {"ref": f"$record.{right}"}},
        "message": PASSWORDS_MATCH,
        "path": right,
    }
    if when is not None:
        rule["when"] = when
    return rule


def _category(entity_id: str, label: str, label_plural: str, language: str) -> dict:
    return {
        "id": entity_id,
        "label": label,
        "label_plural": label_plural,
        "status_field": "status",
        "fields": [
            _language(language),
            {
                "id": "name",
                "type": "string",
                "required": True,
                "min_length": 2,
                "max_length": 50,
                "localized": True,
            },
            {
                "id": "slug",
                "type": "slug",
                "derive_from": "name",
                "min_length": 2,
                "max_length": 60,
                "messages": {"MIN_LENGTH": "Slug is too short", "MAX_LENGTH": "Slug must be less than 60 characters"},
            },
            {"id": "description", "type": "text", "nullable": True, "localized": True},
            _url("image", allow_empty=True),
            _status(ACTIVE_STATUSES, "ACTIVE"),
            {"id": "metaTitle", "type": "string", "label": "Meta Title", "localized": True},
            {"id": "metaDescription", "type": "text", "label": "Meta Description", "localized": True},
        ],
    }


CATEGORY_LIST = {"search_fields": ["name", "description"], "facets": ["status"], "empty_label": "No categories found"}


def _article(language: str) -> dict:
    return {
        "id": "entity.article",
        "label": "Article",
        "status_field": "status",
        "fields": [
            {"id": "title", "type": "string", "required": True, "min_length": 5, "max_length": 120, "localized": True},
            {"id": "slug", "type": "slug", "min_length": 5, "max_length": 100, "derive_from": "title"},
            {"id": "description", "type": "text", "required": True, "min_length": 20, "max_length": 300, "localized": True},
            {
                "id": "content",
                "type": "text",
                "required": True,
                "min_length": 50,
                "max_length": 50000,
                "localized": True,
                "messages": {"MAX_LENGTH": "Content is too long"},
            },
            _url("image", "Invalid image URL", required=True),
            _status(["DRAFT", "PUBLISHED", "ARCHIVED"], "DRAFT"),
            _language(language),
            _ref("categoryId", "Category", required=True),
            {
                "id": "tags",
                "type": "list",
                "max_items": 10,
                "item": {"type": "string", "label": "Tag", "min_length": 2, "max_length": 30},
                "messages": {"MAX_ITEMS": "Max 10 tags"},
            },
            {"id": "relatedArticles", "type": "list", "label": "Related Articles", "item": {"type": "uuid", "label": "Related article"}},
            {"id": "metaTitle", "type": "string", "label": "Meta Title", "max_length": 60, "localized": True},
            {"id": "metaDescription", "type": "text", "label": "Meta Description", "max_length": 160, "localized": True},
            _url("canonicalUrl", label="Canonical URL"),
            {"id": "noIndex", "type": "boolean", "label": "No Index", "required": True},
            {"id": "noFollow", "type": "boolean", "label": "No Follow", "required": True},
            {"id": "ogTitle", "type": "string", "label": "OG Title", "max_length": 95, "localized": True},
            {"id": "ogDescription", "type": "text", "label": "OG Description", "max_length": 200, "localized": True},
            _url("ogImage", label="OG Image"),
            {"id": "twitterTitle", "type": "string", "label": "Twitter Title", "max_length": 70, "localized": True},
            {"id": "twitterDescription", "type": "text", "label": "Twitter Description", "max_length": 200, "localized": True},
            _url("twitterImage", label="Twitter Image"),
        ],
    }


def _faq(language: str) -> dict:
    return {
        "id": "entity.faq",
        "label": "FAQ",
        "label_plural": "FAQs",
        "status_field": "status",
        "fields": [
            _language(language),
            {"id": "question", "type": "string", "required": True, "min_length": 5, "max_length": 200, "localized": True},
            {"id": "answer", "type": "text", "required": True, "min_length": 10, "max_length": 2000, "localized": True},
            _ref("categoryId", "Category", required=True),
            _status(["DRAFT", "PUBLISHED"], "DRAFT"),
            {"id": "order", "type": "integer", "min": 0},
        ],
    }


def _portfolio(language: str) -> dict:
    return {
        "id": "entity.portfolio",
        "label": "Portfolio",
        "label_plural": "portfolio items",
        "fields": [
            {"id": "title", "type": "string", "required": True, "min_length": 2, "max_length": 100, "localized": True},
            _language(language),
            {"id": "description", "type": "text", "min_length": 20, "max_length": 500, "localized": True},
            _url("image", "Invalid image URL", required=True),
            _url("link"),
        ],
    }


def _service(language: str) -> dict:
    return {
        "id": "entity.service",
        "label": "Service",
        "status_field": "status",
        "fields": [
            {
                "id": "name",
                "type": "string",
                "label": "Service name",
                "required": True,
                "min_length": 2,
                "localized": True,
            },
            {"id": "description", "type": "text", "localized": True},
            _status(ACTIVE_STATUSES, "ACTIVE"),
            _language(language),
        ],
    }


def _client() -> dict:
    return {
        "id": "entity.client",
        "label": "Client",
        "status_field": "status",
        "fields": [
            {"id": "name", "type": "string", "required": True, "min_length": 2, "max_length": 100},
            {"id": "email", "type": "email"},
            {
                "id": "phone",
                "type": "string",
                "required": True,
                "pattern": {"regex": PHONE_PATTERN, "message": "Invalid phone number"},
            },
            {"id": "industry", "type": "string", "max_length": 100},
            _status(ACTIVE_STATUSES, "ACTIVE"),
        ],
    }


def _project() -> dict:
    return {
        "id": "entity.project",
        "label": "Project",
        "status_field": "status",
        "fields": [
            {"id": "name", "type": "string", "label": "Project name", "required": True, "min_length": 3, "max_length": 100},
            {"id": "description", "type": "text", "max_length": 1000},
            _ref("clientId", "Client", required=True),
            {
                "id": "budget",
                "type": "number",
                "min": 0,
                "max": 1_000_000_000,
                "messages": {"OUT_OF_RANGE": "Budget must be between 0 and 1000000000"},
            },
            _status(["PLANNED", "ACTIVE", "ON_HOLD", "COMPLETED", "CANCELLED"], "PLANNED"),
            {"id": "priority", "type": "enum", "options": PRIORITIES, "required": True},
            {"id": "deadline", "type": "datetime", "messages": {"INVALID_DATETIME": "Invalid date format"}},
        ],
    }


def _milestone() -> dict:
    return {
        "id": "entity.milestone",
        "label": "Milestone",
        "status_field": "status",
        "fields": [
            {"id": "name", "type": "string", "label": "Milestone name", "required": True, "min_length": 1},
            {"id": "description", "type": "text"},
            _status(["PENDING", "IN_PROGRESS", "COMPLETED", "ON_HOLD"], "PENDING"),
            {"id": "dueDate", "type": "date", "label": "Due Date", "required": True},
            {"id": "progress", "type": "number", "min": 0, "max": 100, "default": 0, "coerce": True},
            {"id": "projectId", "type": "string", "label": "Project ID", "required": True, "min_length": 1},
        ],
    }


def _task() -> dict:
    return {
        "id": "entity.task",
        "label": "Task",
        "status_field": "status",
        "fields": [
            {"id": "name", "type": "string", "label": "Task name", "required": True, "min_length": 2, "max_length": 150},
            {"id": "description", "type": "text", "max_length": 2000},
            _status(["TODO", "IN_PROGRESS", "DONE"], "TODO"),
            {"id": "priority", "type": "enum", "options": PRIORITIES, "required": True},
            {"id": "dueDate", "type": "date", "label": "Due Date"},
            _ref("projectId", "Project", required=True, messages={"INVALID_UUID": "Please select a project"}),
            _ref("milestoneId", "Milestone", nullable=True),
            _ref("assignedToId", "Assignee", nullable=True),
        ],
    }


def _ticket() -> dict:
    return {
        "id": "entity.ticket",
        "label": "Ticket",
        "status_field": "status",
        "fields": [
            {"id": "subject", "type": "string", "required": True, "min_length": 1, "max_length": 255},
            {"id": "description", "type": "text"},
            _status(["OPEN", "IN_PROGRESS", "RESOLVED", "CLOSED"], "OPEN"),
            {"id": "priority", "type": "enum", "options": PRIORITIES, "default": "MEDIUM"},
            {"id": "type", "type": "enum", "options": ["BUG", "FEATURE", "SUPPORT"], "default": "BUG"},
            _ref("projectId", "Project", required=True, messages={"INVALID_UUID": "Please select a project"}),
            _ref("assignedToId", "Assignee", nullable=True),
        ],
    }


def _user() -> dict:
    return {
        "id": "entity.user",
        "label": "User",
        "fields": [
            {
                "id": "fullName",
                "type": "string",
                "label": "Name",
                "required": True,
                "min_length": 2,
                "max_length": 100,
                "messages": {"MAX_LENGTH": "Name is too long"},
            },
            {"id": "email", "type": "email", "required": True},
            _password("password", 128, required=True, create_only=True),
            {"id": "phone", "type": "string", "pattern": {"regex": USER_PHONE_PATTERN, "message": "Invalid phone number"}},
            {"id": "role", "type": "enum", "options": ["admin", "user"], "default": "user"},
        ],
    }


def _team_member() -> dict:
    return {
        "id": "entity.team_member",
        "label": "Team Member",
        "fields": [
            {"id": "name", "type": "string", "required": True, "min_length": 2, "max_length": 100},
            {"id": "position", "type": "string", "required": True, "min_length": 2, "max_length": 100},
            {"id": "bio", "type": "text", "required": True, "min_length": 10, "max_length": 2000},
            _url("image", "Invalid image URL", required=True),
            _url("linkedin", label="LinkedIn"),
            _url("github", label="GitHub"),
            _url("x", label="X"),
            _url("facebook"),
            _url("instagram"),
        ],
    }


def _testimonial() -> dict:
    return {
        "id": "entity.testimonial",
        "label": "Testimonial",
        "fields": [
            {"id": "clientName", "type": "string", "label": "Client name", "required": True, "min_length": 2, "max_length": 100},
            {"id": "role", "type": "string", "required": True, "min_length": 2, "max_length": 100},
            {"id": "company", "type": "string", "required": True, "min_length": 2, "max_length": 100},
            {"id": "content", "type": "text", "required": True, "min_length": 10, "max_length": 500},
            {"id": "rating", "type": "number", "min": 1, "max": 5, "default": 5, "coerce": True},
            _url("image", "Invalid image URL", allow_empty=True),
            {"id": "isActive", "type": "boolean", "label": "Active", "default": True},
        ],
    }


def _social_post() -> dict:
    return {
        "id": "entity.social_post",
        "label": "Social Post",
        "label_plural": "posts",
        "status_field": "status",
        "fields": [
            {
                "id": "content",
                "type": "text",
                "required": True,
                "min_length": 1,
                "max_length": 2200,
                "messages": {"MAX_LENGTH": "Content too long"},
            },
            {
                "id": "platforms",
                "type": "list",
                "required": True,
                "min_items": 1,
                "item": {"type": "enum", "label": "Platform", "options": PLATFORMS},
                "messages": {"MIN_ITEMS": "Select at least one platform", "REQUIRED_FIELD": "Select at least one platform"},
            },
            {"id": "mediaUrls", "type": "list", "label": "Media URLs", "item": {"type": "string"}},
            {"id": "hashtags", "type": "list", "item": {"type": "string"}},
            {"id": "scheduledAt", "type": "datetime", "label": "Scheduled At"},
            _status(["draft", "scheduled", "pending_approval", "approved", "published", "failed", "rejected"], "draft"),
            {"id": "clientId", "type": "string", "label": "Client"},
            {"id": "projectId", "type": "string", "label": "Project"},
        ],
    }


def _invoice() -> dict:
    return {
        "id": "entity.invoice",
        "label": "Invoice",
        "status_field": "status",
        "fields": [
            {"id": "invoiceNumber", "type": "string", "label": "Invoice number", "required": True, "min_length": 1},
            {"id": "client", "type": "string", "label": "Client name", "required": True, "min_length": 1},
            {"id": "project", "type": "string", "required": True, "min_length": 1},
            {"id": "issueDate", "type": "date", "label": "Issue Date", "required": True},
            {"id": "dueDate", "type": "date", "label": "Due Date", "required": True},
            {
                "id": "items",
                "type": "list",
                "required": True,
                "min_items": 1,
                "fields": [
                    {"id": "description", "type": "string", "required": True, "min_length": 1},
                    {"id": "quantity", "type": "number", "required": True, "min": 1},
                    {"id": "price", "type": "number", "required": True, "min": 0, "messages": {"OUT_OF_RANGE": "Price must be non-negative"}},
                ],
                "messages": {"MIN_ITEMS": "At least one item is required", "REQUIRED_FIELD": "At least one item is required"},
            },
            _status(["DRAFT", "SENT", "PAID", "OVERDUE", "CANCELLED"], "DRAFT"),
            {"id": "notes", "type": "text"},
        ],
    }


def _expense() -> dict:
    return {
        "id": "entity.expense",
        "label": "Expense",
        "status_field": "status",
        "fields": [
            {"id": "title", "type": "string", "required": True, "min_length": 1, "max_length": 100, "messages": {"MAX_LENGTH": "Title is too long"}},
            {
                "id": "amount",
                "type": "number",
                "required": True,
                "min": 0.01,
                "coerce": True,
                "messages": {"OUT_OF_RANGE": "Amount must be greater than 0"},
            },
            {"id": "date", "type": "date", "required": True},
            {
                "id": "category",
                "type": "enum",
                "required": True,
                "options": EXPENSE_CATEGORIES,
                "messages": {"INVALID_ENUM": "Category is required", "REQUIRED_FIELD": "Category is required"},
            },
            {"id": "description", "type": "text"},
            _url("receipt", allow_empty=True),
            _status(["PENDING", "APPROVED", "PAID", "REJECTED"], "PENDING"),
        ],
    }


def _expense_category() -> dict:
    return {
        "id": "entity.expense_category",
        "label": "Expense Category",
        "label_plural": "expense categories",
        "status_field": "status",
        "fields": [
            {"id": "name", "type": "string", "required": True, "min_length": 1, "max_length": 50, "messages": {"MAX_LENGTH": "Name is too long"}},
            {"id": "description", "type": "text"},
            _status(ACTIVE_STATUSES, "ACTIVE"),
        ],
    }


def _message() -> dict:
    return {
        "id": "entity.message",
        "label": "Message",
        "fields": [
            {"id": "name", "type": "string", "required": True, "min_length": 1, "max_length": 100},
            {"id": "email", "type": "email", "required": True},
            {"id": "subject", "type": "string", "required": True, "min_length": 1, "max_length": 200},
            {"id": "message", "type": "text", "required": True, "min_length": 1},
            {"id": "isRead", "type": "boolean", "label": "Read", "default": False},
        ],
    }


def _about() -> dict:
    return {
        "id": "entity.about",
        "label": "About",
        "kind": "form",
        "fields": [
            {"id": "title", "type": "string", "required": True, "min_length": 2, "max_length": 100},
            _url("website"),
            _url("logo"),
            {"id": "description", "type": "text", "min_length": 20, "max_length": 2000},
            {"id": "mission", "type": "text", "min_length": 10, "max_length": 1000, "localized": True},
            {"id": "vision", "type": "text", "min_length": 10, "max_length": 1000, "localized": True},
            {
                "id": "values",
                "type": "list",
                "max_items": 10,
                "fields": [{"id": "value", "type": "string", "required": True, "min_length": 2, "max_length": 50, "localized": True}],
                "messages": {"MAX_ITEMS": "Maximum 10 values allowed"},
            },
            _url("facebook"),
            _url("x", label="X"),
            _url("linkedin", label="LinkedIn"),
            _url("instagram"),
            _url("youtube", label="YouTube"),
            _url("tiktok", label="TikTok"),
            _url("threads"),
            {"id": "email", "type": "email"},
            {"id": "phone", "type": "string", "min_length": 7, "max_length": 20, "messages": {"MIN_LENGTH": "Invalid phone number", "MAX_LENGTH": "Invalid phone number"}},
        ],
    }


def _profile_settings() -> dict:
    return {
        "id": "entity.profile_settings",
        "label": "Profile Settings",
        "kind": "form",
        "fields": [
            {"id": "fullName", "type": "string", "label": "Name", "required": True, "min_length": 2},
            {"id": "email", "type": "email", "required": True},
            {"id": "avatar", "type": "string"},
        ],
    }


def _security_settings() -> dict:
    new_password_set = {"op": "exists", "field": "newPassword"}
    return {
        "id": "entity.security_settings",
        "label": "Security Settings",
        "kind": "form",
        "fields": [
            {"id": "currentPassword", "type": "string", "label": "Current password", "min_length": 1, "trim": False},
            {"id": "newPassword", "type": "string", "label": "Password", "min_length": 8, "trim": False},
            {"id": "confirmPassword", "type": "string", "label": "Confirm password", "trim": False},
            {"id": "twoFactorEnabled", "type": "boolean", "label": "Two-factor authentication"},
        ],
        "rules": [
            {
                "id": "current_password_required",
                "when": new_password_set,
                "condition": {"op": "exists", "field": "currentPassword"},
                "message": "Current password is required to set a new password",
                "path": "currentPassword",
            },
            {
                **_matching("passwords_match", "newPassword", "confirmPassword", when=new_password_set),
                "message": "Passwords do not match",
            },
        ],
    }


def _appearance_settings() -> dict:
    return {
        "id": "entity.appearance_settings",
        "label": "Appearance Settings",
        "kind": "form",
        "fields": [
            {"id": "theme", "type": "enum", "required": True, "options": ["light", "dark", "system"]},
            {"id": "fontSize", "type": "enum", "label": "Font Size", "required": True, "options": ["small", "medium", "large"]},
            {"id": "reduceMotion", "type": "boolean", "label": "Reduce Motion", "default": False},
        ],
    }


def _site_settings() -> dict:
    return {
        "id": "entity.site_settings",
        "label": "Site Settings",
        "kind": "form",
        "fields": [
            {"id": "siteName", "type": "string", "label": "Site name", "required": True, "min_length": 1},
            {"id": "siteDescription", "type": "text", "label": "Description", "max_length": 300, "messages": {"MAX_LENGTH": "Description too long"}},
            {"id": "contactEmail", "type": "email", "required": True, "messages": {"INVALID_EMAIL": "Invalid contact email"}},
            _url("logo", allow_empty=True),
            {
                "id": "socialLinks",
                "type": "object",
                "label": "Social Links",
                "fields": [
                    _url("twitter", allow_empty=True),
                    _url("facebook", allow_empty=True),
                    _url("instagram", allow_empty=True),
                    _url("linkedin", label="LinkedIn", allow_empty=True),
                ],
            },
            {"id": "maintenanceMode", "type": "boolean", "label": "Maintenance Mode", "required": True},
        ],
    }


def _login() -> dict:
    return {
        "id": "entity.login",
        "label": "Login",
        "kind": "form",
        "fields": [
            {"id": "email", "type": "email", "required": True},
            {"id": "password", "type": "string", "required": True, "min_length": 8, "messages": {"MIN_LENGTH": "Password must be at least 8 characters"}},
        ],
    }


def _forget_password() -> dict:
    return {
        "id": "entity.forget_password",
        "label": "Forget Password",
        "kind": "form",
        "fields": [
            {"id": "email", "type": "email", "required": True, "max_length": 128, "messages": {"MAX_LENGTH": "Email must be less than 128 characters"}},
        ],
    }


def _otp() -> dict:
    return {
        "id": "entity.otp",
        "label": "OTP",
        "kind": "form",
        "fields": [
            {"id": "otp", "type": "string", "label": "OTP", "required": True, "pattern": {"regex": r"^\d{6}$", "message": "OTP must be 6 digits"}},
        ],
    }


def _reset_password() -> dict:
    return {
        "id": "entity.reset_password",
        "label": "Reset Password",
        "kind": "form",
        "fields": [
            _password("password", 64, required=True, trim=True, messages={"MAX_LENGTH": "Password must be less than 64 characters"}),
            {"id": "confirmPassword", "type": "string", "label": "Confirm password", "required": True, "min_length": 1, "trim": False},
        ],
        "rules": [_matching("passwords_match", "password", "confirmPassword")],
    }


def _change_password() -> dict:
    return {
        "id": "entity.change_password",
        "label": "Change Password",
        "kind": "form",
        "fields": [
            {"id": "currentPassword", "type": "string", "label": "Current password", "required": True, "min_length": 1, "trim": False},
            _password("newPassword", 64, label="Password", required=True, trim=True, messages={"MAX_LENGTH": "Password must be less than 64 characters"}),
            {"id": "confirmPassword", "type": "string", "label": "Confirm password", "required": True, "min_length": 1, "trim": False},
        ],
        "rules": [_matching("passwords_match", "newPassword", "confirmPassword")],
    }


def builtin_schemas(language: str | None = None) -> list[tuple[dict, dict | None]]:
    """(schema, list_spec) pairs for every built-in entity and form."""
    language = language or config.default_language()
    return [
        (_article(language), {
            "search_fields": ["title", "description"],
            "facets": ["status", {"id": "category", "field": "category.name"}],
        }),
        (_category("entity.blog_category", "Blog Category", "blog categories", language), CATEGORY_LIST),
        (_faq(language), {"search_fields": ["question", "answer"], "facets": ["status"]}),
        (_category("entity.faq_category", "FAQ Category", "FAQ categories", language), CATEGORY_LIST),
        (_portfolio(language), {"search_fields": ["title", "description"]}),
        (_category("entity.portfolio_category", "Portfolio Category", "portfolio categories", language), CATEGORY_LIST),
        (_service(language), {"search_fields": ["name", "description"], "facets": ["status"]}),
        (_client(), {"search_fields": ["name", "email"], "facets": ["status"]}),
        (_project(), {"search_fields": ["name", "clientName", "description"], "facets": ["status", "priority"]}),
        (_milestone(), {"search_fields": ["name", "description"], "facets": ["status"]}),
        (_task(), {
            "search_fields": ["name", "description"],
            "facets": ["status", "priority", {"id": "assignee", "field": "assignedToId"}],
        }),
        (_ticket(), {
            "search_fields": ["subject", "description"],
            "facets": ["status", "priority", "type", {"id": "assignee", "field": "assignedToId"}],
        }),
        (_user(), {"search_fields": ["fullName", "email"], "facets": ["role"]}),
        (_team_member(), {"search_fields": ["name", "position", "bio"]}),
        (_testimonial(), {
            "search_fields": ["clientName", "company"],
            "facets": [{"id": "status", "field": "isActive", "kind": "boolean"}],
        }),
        (_social_post(), {
            "search_fields": ["content"],
            "facets": ["status", {"id": "platform", "field": "platforms", "kind": "member"}],
        }),
        (_invoice(), {"search_fields": ["invoiceNumber", "client"], "facets": ["status"]}),
        (_expense(), {"search_fields": ["title"], "facets": ["category", "status"]}),
        (_expense_category(), {"search_fields": ["name", "description"], "facets": ["status"], "empty_label": "No categories found"}),
        (_message(), {"search_fields": ["name", "subject", "email"]}),
        (_about(), None),
        (_profile_settings(), None),
        (_security_settings(), None),
        (_appearance_settings(), None),
        (_site_settings(), None),
        (_login(), None),
        (_forget_password(), None),
        (_otp(), None),
        (_reset_password(), None),
        (_change_password(), None),
    ]


def build_registry(language: str | None = None) -> SchemaRegistry:
    registry = SchemaRegistry()
    for schema, list_spec in builtin_schemas(language):
        result = registry.register(schema, list_spec=list_spec)
        if not result["ok"]:
            raise ValueError(f"built-in schema {schema['id']} is invalid: {result['errors']}")
    logger.info("registry_built entities=%s", len(registry.list()))
    return registry
