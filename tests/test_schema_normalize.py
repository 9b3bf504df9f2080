import os
import sys
import unittest


ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from app.schema_normalize import entity_label, normalize_entity, normalize_fields, translation_pairs


class TestSchemaNormalize(unittest.TestCase):
    def test_localized_field_gets_optional_twin(self) -> None:
        fields = normalize_fields(
            [{"id": "name", "type": "string", "required": True, "min_length": 2, "max_length": 50, "localized": True}]
        )
        self.assertEqual([f["id"] for f in fields], ["name", "name_ar"])
        base, twin = fields
        self.assertNotIn("localized", base)
        self.assertTrue(base["required"])
        self.assertFalse(twin["required"])
        self.assertEqual(twin["translation_of"], "name")
        self.assertEqual(twin["label"], "Arabic Name")
        self.assertEqual(twin["min_length"], 2)
        self.assertEqual(twin["max_length"], 50)
        self.assertTrue(twin["trim"])

    def test_field_defaults(self) -> None:
        fields = normalize_fields(
            [
                {"id": "metaTitle"},
                {"id": "email", "type": "email"},
                {"id": "status", "type": "enum", "options": ["ACTIVE", "INACTIVE"]},
            ]
        )
        meta, email, status = fields
        self.assertEqual(meta["type"], "string")
        self.assertEqual(meta["label"], "Meta Title")
        self.assertTrue(meta["trim"])
        self.assertTrue(email["lowercase"])
        self.assertEqual(status["options"][0], {"value": "ACTIVE", "label": "ACTIVE"})

    def test_dict_fields(self) -> None:
        fields = normalize_fields({"name": {"type": "string"}, "notes": {"type": "text"}})
        self.assertEqual([f["id"] for f in fields], ["name", "notes"])

    def test_nested_list_fields(self) -> None:
        fields = normalize_fields(
            [{"id": "values", "type": "list", "fields": [{"id": "value", "type": "string", "localized": True}]}]
        )
        nested = fields[0]["fields"]
        self.assertEqual([f["id"] for f in nested], ["value", "value_ar"])

    def test_list_item_label(self) -> None:
        fields = normalize_fields([{"id": "tags", "type": "list", "item": {"type": "string"}}])
        item = fields[0]["item"]
        self.assertEqual(item["id"], "item")
        self.assertEqual(item["label"], "Tags")

    def test_entity_defaults(self) -> None:
        entity = normalize_entity({"id": "entity.team_member", "fields": [{"id": "name"}]})
        self.assertEqual(entity["kind"], "entity")
        self.assertEqual(entity["label"], "Team Member")
        self.assertEqual(entity["label_plural"], "team members")
        self.assertEqual(entity["id_field"], "id")
        self.assertIsNone(entity["status_field"])
        self.assertEqual(entity["rules"], [])

    def test_form_has_no_id_field(self) -> None:
        entity = normalize_entity({"id": "entity.login", "kind": "form", "id_field": "id", "fields": [{"id": "email"}]})
        self.assertIsNone(entity["id_field"])

    def test_does_not_mutate_input(self) -> None:
        raw = {"id": "entity.faq", "fields": [{"id": "question", "localized": True}]}
        normalize_entity(raw)
        self.assertEqual(raw["fields"], [{"id": "question", "localized": True}])

    def test_translation_pairs(self) -> None:
        entity = normalize_entity({"id": "entity.faq", "fields": [{"id": "question", "localized": True}, {"id": "order"}]})
        self.assertEqual(translation_pairs(entity), [("question", "question_ar")])

    def test_entity_label(self) -> None:
        self.assertEqual(entity_label("entity.team_member"), "Team Member")
        self.assertEqual(entity_label("socialPost"), "Social Post")


if __name__ == "__main__":
    unittest.main()
