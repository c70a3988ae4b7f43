from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_mode, json_body, login_required, module_required
from ..container import Container
from ..core.enums import ModuleId
from ..core.exceptions import ValidationError
from .repository import config_to_item


def _string_list(data: dict, key: str) -> list:
    values = data.get(key)
    if not isinstance(values, list):
        raise ValidationError(f"{key} must be a list")
    return values


def register(app: Flask, container: Container) -> None:
    def catalog():
        return container.services(current_mode(container.default_mode)).catalog_service

    @app.route("/api/config", methods=["GET"], endpoint="get_config")
    @login_required
    def get_config():
        return jsonify(config_to_item(catalog().get_config()))

    @app.route("/api/config/class-types", methods=["POST"], endpoint="add_class_type")
    @module_required(ModuleId.SETTINGS, edit=True)
    def add_class_type():
        data = json_body()
        config = catalog().add_class_type(type_id=data.get("id", ""), name=data.get("name", ""))
        return jsonify(config_to_item(config)), 201

    @app.route("/api/config/class-types/<type_id>", methods=["PUT"], endpoint="rename_class_type")
    @module_required(ModuleId.SETTINGS, edit=True)
    def rename_class_type(type_id: str):
        config = catalog().rename_class_type(type_id=type_id, name=json_body().get("name", ""))
        return jsonify(config_to_item(config))

    @app.route("/api/config/class-types/<type_id>", methods=["DELETE"], endpoint="remove_class_type")
    @module_required(ModuleId.SETTINGS, edit=True)
    def remove_class_type(type_id: str):
        return jsonify(config_to_item(catalog().remove_class_type(type_id)))

    @app.route("/api/config/subjects", methods=["PUT"], endpoint="set_subjects")
    @module_required(ModuleId.SETTINGS, edit=True)
    def set_subjects():
        return jsonify(config_to_item(catalog().set_subjects(_string_list(json_body(), "subjects"))))

    @app.route("/api/config/expense-categories", methods=["PUT"], endpoint="set_expense_categories")
    @module_required(ModuleId.SETTINGS, edit=True)
    def set_expense_categories():
        categories = _string_list(json_body(), "expenseCategories")
        return jsonify(config_to_item(catalog().set_expense_categories(categories)))
