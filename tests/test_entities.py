import os
import sys
import unittest


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from app.entities import build_registry, builtin_schemas
from app.records_filter import empty_state_message

RECORD_ID = "123e4567-e89b-12d3-a456-426614174000"
CATEGORY_ID = "9b2f7f3e-1c1d-4c8e-8f43-2b1e3e7f0a11"

ENTITIES = [
    "article",
    "blog_category",
    "faq",
    "faq_category",
    "portfolio",
    "portfolio_category",
    "service",
    "client",
    "project",
    "milestone",
    "task",
    "ticket",
    "user",
    "team_member",
    "testimonial",
    "social_post",
    "invoice",
    "expense",
    "expense_category",
    "message",
]
FORMS = [
    "about",
    "profile_settings",
    "security_settings",
    "appearance_settings",
    "site_settings",
    "login",
    "forget_password",
    "otp",
    "reset_password",
    "change_password",
]


def _codes(result):
    return [e["code"] for e in result["errors"]]


class TestBuiltinRegistry(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.registry = build_registry(language="en")

    def test_catalogue_complete(self) -> None:
        ids = {s["id"] for s in self.registry.list()}
        self.assertEqual(ids, {f"entity.{name}" for name in ENTITIES + FORMS})
        for name in ENTITIES:
            self.assertEqual(self.registry.get(name)["kind"], "entity", name)
            self.assertIsNotNone(self.registry.list_spec(name), name)
        for name in FORMS:
            self.assertEqual(self.registry.get(name)["kind"], "form", name)

    def test_registry_is_fresh(self) -> None:
        other = build_registry(language="en")
        self.assertIsNot(other, self.registry)
        self.assertEqual(len(other.list()), len(builtin_schemas("en")))

    def test_status_defaults(self) -> None:
        expected = {
            "article": "DRAFT",
            "faq": "DRAFT",
            "blog_category": "ACTIVE",
            "service": "ACTIVE",
            "client": "ACTIVE",
            "project": "PLANNED",
            "milestone": "PENDING",
            "task": "TODO",
            "ticket": "OPEN",
            "social_post": "draft",
            "invoice": "DRAFT",
            "expense": "PENDING",
            "expense_category": "ACTIVE",
        }
        for name, default in expected.items():
            schema = self.registry.get(name)
            status = next(f for f in schema["fields"] if f["id"] == schema["status_field"])
            self.assertEqual(status["default"], default, name)

    def test_category_name_trimmed(self) -> None:
        result = self.registry.validate("blog_category", {"name": "  Jo  "})
        self.assertTrue(result["ok"], result["errors"])
        self.assertEqual(result["record"]["name"], "Jo")
        self.assertEqual(result["record"]["language"], "en")
        self.assertEqual(result["record"]["status"], "ACTIVE")

    def test_category_slug(self) -> None:
        bad = self.registry.validate("faq_category", {"name": "Tech", "slug": "My Category"})
        self.assertEqual(bad["errors"][0]["message"], "Slug must be lowercase and URL-friendly")
        good = self.registry.validate("faq_category", {"name": "Tech", "slug": "my-category"})
        self.assertTrue(good["ok"])

    def test_category_slug_derived_from_name(self) -> None:
        result = self.registry.validate("blog_category", {"name": "Tech & Travel"})
        self.assertTrue(result["ok"], result["errors"])
        self.assertEqual(result["record"]["slug"], "tech-travel")
        explicit = self.registry.validate("blog_category", {"name": "Tech & Travel", "slug": "travel"})
        self.assertEqual(explicit["record"]["slug"], "travel")

    def test_faq_update_requires_canonical_id(self) -> None:
        for record_id in ("urn:uuid:" + RECORD_ID, RECORD_ID.replace("-", "")):
            result = self.registry.validate("faq", {"id": record_id, "order": 1}, mode="update")
            self.assertFalse(result["ok"])
            self.assertEqual(result["errors"][0]["code"], "INVALID_UUID")
            self.assertEqual(result["errors"][0]["message"], "Invalid faq id")

    def test_faq_identifier_only_update(self) -> None:
        result = self.registry.validate("faq", {"id": RECORD_ID}, mode="update")
        self.assertEqual([e["message"] for e in result["errors"]], ["At least one field must be updated"])

    def test_article_reports_all_fields(self) -> None:
        result = self.registry.validate("article", {"title": "Hi", "categoryId": "nope"})
        paths = [e["path"] for e in result["errors"]]
        self.assertEqual(paths, ["title", "description", "content", "image", "categoryId", "noIndex", "noFollow"])
        messages = {e["path"]: e["message"] for e in result["errors"]}
        self.assertEqual(messages["categoryId"], "Invalid category id")

    def test_article_create(self) -> None:
        payload = {
            "title": "Hello world",
            "description": "A short description of the post",
            "content": "x" * 60,
            "image": "https://cdn.example.com/a.png",
            "categoryId": CATEGORY_ID,
            "tags": ["python", "web"],
            "noIndex": False,
            "noFollow": False,
        }
        result = self.registry.validate("article", payload)
        self.assertTrue(result["ok"], result["errors"])
        self.assertEqual(result["record"]["status"], "DRAFT")
        self.assertEqual(result["record"]["tags"], ["python", "web"])
        self.assertEqual(result["record"]["slug"], "hello-world")

    def test_article_tag_limit(self) -> None:
        result = self.registry.validate("article", {"id": RECORD_ID, "tags": [f"t{i}" for i in range(11)]}, mode="update")
        self.assertEqual(result["errors"][0]["message"], "Max 10 tags")

    def test_testimonial_rating(self) -> None:
        base = {"clientName": "Ann", "role": "CTO", "company": "Acme", "content": "Great work overall"}
        ok = self.registry.validate("testimonial", {**base, "rating": "4"})
        self.assertTrue(ok["ok"], ok["errors"])
        self.assertEqual(ok["record"]["rating"], 4)
        self.assertTrue(ok["record"]["isActive"])
        for rating in (0, 6):
            result = self.registry.validate("testimonial", {**base, "rating": rating})
            self.assertEqual(_codes(result), ["OUT_OF_RANGE"])
        self.assertTrue(self.registry.validate("testimonial", {**base, "rating": 5})["ok"])

    def test_milestone_progress_bounds(self) -> None:
        base = {"name": "Alpha", "dueDate": "2026-06-01", "projectId": "p1"}
        self.assertTrue(self.registry.validate("milestone", {**base, "progress": 100})["ok"])
        self.assertEqual(_codes(self.registry.validate("milestone", {**base, "progress": 101})), ["OUT_OF_RANGE"])
        defaulted = self.registry.validate("milestone", base)
        self.assertEqual(defaulted["record"]["progress"], 0)
        self.assertEqual(defaulted["record"]["status"], "PENDING")

    def test_client_phone(self) -> None:
        result = self.registry.validate("client", {"name": "Acme", "phone": "12ab"})
        self.assertEqual(result["errors"][0]["message"], "Invalid phone number")
        result = self.registry.validate("client", {"name": "Acme", "phone": "+1 (555) 123-4567", "email": " Sales@Acme.io "})
        self.assertTrue(result["ok"], result["errors"])
        self.assertEqual(result["record"]["email"], "sales@acme.io")

    def test_invoice_items(self) -> None:
        base = {
            "invoiceNumber": "INV-1",
            "client": "Acme",
            "project": "Site",
            "issueDate": "2026-01-01",
            "dueDate": "2026-02-01",
        }
        missing = self.registry.validate("invoice", base)
        self.assertEqual(missing["errors"][0]["message"], "At least one item is required")
        bad = self.registry.validate("invoice", {**base, "items": [{"description": "Design", "quantity": 1, "price": -1}]})
        self.assertEqual(bad["errors"][0]["path"], "items[0].price")
        self.assertEqual(bad["errors"][0]["message"], "Price must be non-negative")

    def test_expense(self) -> None:
        result = self.registry.validate("expense", {"title": "Laptop", "amount": "0", "date": "2026-01-01", "category": "Toys"})
        self.assertEqual(_codes(result), ["OUT_OF_RANGE", "INVALID_ENUM"])
        self.assertEqual(result["errors"][1]["message"], "Category is required")
        ok = self.registry.validate("expense", {"title": "Laptop", "amount": "999.99", "date": "2026-01-01", "category": "Office"})
        self.assertTrue(ok["ok"], ok["errors"])
        self.assertEqual(ok["record"]["amount"], 999.99)

    def test_social_post_platforms(self) -> None:
        result = self.registry.validate("social_post", {"content": "Launch!", "platforms": []})
        self.assertEqual(result["errors"][0]["message"], "Select at least one platform")
        result = self.registry.validate("social_post", {"content": "Launch!", "platforms": ["myspace"]})
        self.assertEqual(result["errors"][0]["path"], "platforms[0]")
        ok = self.registry.validate("social_post", {"content": "Launch!", "platforms": ["twitter"]})
        self.assertEqual(ok["record"]["status"], "draft")

    def test_task_nullable_assignee(self) -> None:
        project_id = CATEGORY_ID
        result = self.registry.validate(
            "task", {"name": "Write docs", "priority": "LOW", "projectId": project_id, "assignedToId": None}
        )
        self.assertTrue(result["ok"], result["errors"])
        self.assertIsNone(result["record"]["assignedToId"])
        bad = self.registry.validate("task", {"name": "Write docs", "priority": "LOW", "projectId": "x"})
        self.assertEqual(bad["errors"][0]["message"], "Please select a project")
        unhyphenated = self.registry.validate(
            "task", {"name": "Write docs", "priority": "LOW", "projectId": project_id.replace("-", "")}
        )
        self.assertEqual([e["path"] for e in unhyphenated["errors"]], ["projectId"])

    def test_user_password(self) -> None:
        base = {"fullName": "Jo Doe", "email": "jo@example.com"}
        weak = self.registry.validate("user", {**base, "password": "password1"})
        self.assertEqual(weak["errors"][0]["message"], "Password must contain at least one uppercase letter")
        ok = self.registry.validate("user", {**base, "password": "Password1"})
        self.assertEqual(ok["record"]["role"], "user")
        update = self.registry.validate("user", {"id": RECORD_ID, "password": "Password2"}, mode="update")
        self.assertEqual(_codes(update), ["NO_CHANGES"])

    def test_reset_password_rule(self) -> None:
        result = self.registry.validate("reset_password", {"password": "Password1", "confirmPassword": "Password2"})
        self.assertEqual(result["errors"][0]["code"], "RULE_FAILED")
        self.assertEqual(result["errors"][0]["message"], "Passwords don't match")
        self.assertEqual(result["errors"][0]["path"], "confirmPassword")
        self.assertTrue(self.registry.validate("reset_password", {"password": "Password1", "confirmPassword": "Password1"})["ok"])

    def test_change_password_rule(self) -> None:
        payload = {"currentPassword": "old", "newPassword": "Password1", "confirmPassword": "Password9"}
        result = self.registry.validate("change_password", payload)
        self.assertEqual(_codes(result), ["RULE_FAILED"])

    def test_security_settings_rules(self) -> None:
        self.assertTrue(self.registry.validate("security_settings", {"twoFactorEnabled": True})["ok"])
        result = self.registry.validate("security_settings", {"newPassword": "longenough"})
        self.assertEqual(
            [(e["path"], e["message"]) for e in result["errors"]],
            [
                ("currentPassword", "Current password is required to set a new password"),
                ("confirmPassword", "Passwords do not match"),
            ],
        )

    def test_otp(self) -> None:
        self.assertTrue(self.registry.validate("otp", {"otp": " 123456 "})["ok"])
        self.assertEqual(_codes(self.registry.validate("otp", {"otp": "12345"})), ["PATTERN_MISMATCH"])

    def test_about_values(self) -> None:
        result = self.registry.validate("about", {"title": "Acme", "values": [{"value": "Trust", "value_ar": "x"}]})
        self.assertEqual(result["errors"][0]["path"], "values[0].value_ar")
        ok = self.registry.validate("about", {"title": "Acme", "values": [{"value": "Trust"}]})
        self.assertEqual(ok["record"]["values"], [{"value": "Trust"}])

    def test_site_settings(self) -> None:
        result = self.registry.validate(
            "site_settings",
            {"siteName": "Acme", "contactEmail": "bad", "maintenanceMode": False, "socialLinks": {"twitter": ""}},
        )
        self.assertEqual(result["errors"][0]["message"], "Invalid contact email")
        ok = self.registry.validate(
            "site_settings",
            {"siteName": "Acme", "contactEmail": "hi@acme.io", "maintenanceMode": False, "socialLinks": {"twitter": ""}},
        )
        self.assertEqual(ok["record"]["socialLinks"], {"twitter": ""})

    def test_forms_reject_updates(self) -> None:
        result = self.registry.validate("login", {"email": "jo@example.com"}, mode="update")
        self.assertEqual(_codes(result), ["MODE_UNSUPPORTED"])

    def test_empty_state_labels(self) -> None:
        self.assertEqual(empty_state_message(self.registry.list_spec("blog_category")), "No categories found")
        self.assertEqual(empty_state_message(self.registry.list_spec("team_member")), "No team members found")
        self.assertEqual(empty_state_message(self.registry.list_spec("client")), "No clients found")


if __name__ == "__main__":
    unittest.main()
