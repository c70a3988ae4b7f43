from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import month_key, today_local
from ..common.web import current_mode, json_body, module_required
from ..container import Container
from ..core.enums import ModuleId
from .repository import expense_to_item, sale_to_item

_EXPENSE_FIELDS = {"date": "date", "title": "title", "category": "category", "amount": "amount", "note": "note"}
_SALE_FIELDS = {
    "date": "date",
    "studentId": "student_id",
    "itemName": "item_name",
    "quantity": "quantity",
    "price": "price",
}


def _pick(data: dict, fields: dict) -> dict:
    return {attr: data[key] for key, attr in fields.items() if key in data}


def register(app: Flask, container: Container) -> None:
    def services():
        return container.services(current_mode(container.default_mode))

    @app.route("/api/expenses", methods=["GET"], endpoint="list_expenses")
    @module_required(ModuleId.EXPENSES)
    def list_expenses():
        summary = services().expense_service.monthly_summary(
            request.args.get("month") or month_key(today_local()),
            search=request.args.get("q"),
            category=request.args.get("category"),
        )
        return jsonify(
            {
                "expenses": [expense_to_item(e) for e in summary.expenses],
                "total_amount": summary.total_amount,
                "by_category": summary.by_category,
            }
        )

    @app.route("/api/expenses", methods=["POST"], endpoint="add_expense")
    @module_required(ModuleId.EXPENSES, edit=True)
    def add_expense():
        expense = services().expense_service.create(**_pick(json_body(), _EXPENSE_FIELDS))
        return jsonify(expense_to_item(expense)), 201

    @app.route("/api/expenses/<expense_id>", methods=["PUT"], endpoint="update_expense")
    @module_required(ModuleId.EXPENSES, edit=True)
    def update_expense(expense_id: str):
        expense = services().expense_service.update(expense_id, **_pick(json_body(), _EXPENSE_FIELDS))
        return jsonify(expense_to_item(expense))

    @app.route("/api/expenses/<expense_id>", methods=["DELETE"], endpoint="delete_expense")
    @module_required(ModuleId.EXPENSES, edit=True)
    def delete_expense(expense_id: str):
        services().expense_service.delete(expense_id)
        return jsonify({"success": True})

    @app.route("/api/sales", methods=["GET"], endpoint="list_sales")
    @module_required(ModuleId.SALES)
    def list_sales():
        summary = services().sales_service.monthly_summary(
            request.args.get("month") or month_key(today_local()),
            search=request.args.get("q"),
            student_id=request.args.get("student_id"),
        )
        return jsonify(
            {
                "sales": [sale_to_item(s) for s in summary.sales],
                "total_revenue": summary.total_revenue,
                "total_quantity": summary.total_quantity,
            }
        )

    @app.route("/api/sales", methods=["POST"], endpoint="add_sale")
    @module_required(ModuleId.SALES, edit=True)
    def add_sale():
        data = json_body()
        sale = services().sales_service.create(
            date=data.get("date", ""),
            student_id=data.get("studentId", ""),
            item_name=data.get("itemName", ""),
            quantity=data.get("quantity"),
            price=data.get("price"),
        )
        return jsonify(sale_to_item(sale)), 201

    @app.route("/api/sales/<sale_id>", methods=["PUT"], endpoint="update_sale")
    @module_required(ModuleId.SALES, edit=True)
    def update_sale(sale_id: str):
        sale = services().sales_service.update(sale_id, **_pick(json_body(), _SALE_FIELDS))
        return jsonify(sale_to_item(sale))

    @app.route("/api/sales/<sale_id>", methods=["DELETE"], endpoint="delete_sale")
    @module_required(ModuleId.SALES, edit=True)
    def delete_sale(sale_id: str):
        services().sales_service.delete(sale_id)
        return jsonify({"success": True})
