"""Shared fixtures: a small catalog API description and indices built over it."""

import copy
import json

import pytest

from openapi_context.mcp_server.shared_resources import SharedResources
from openapi_context.openapi_processor.processor import SpecLoader
from openapi_context.retriever.data_classes import RetrieverConfig
from openapi_context.retriever.spec_index import SpecIndex
from openapi_context.vector_store.embedders import HashingEmbedder


def _json_response(description, schema):
    return {"description": description, "content": {"application/json": {"schema": schema}}}


def _ref(name):
    return {"$ref": f"#/components/schemas/{name}"}


CATALOG_SPEC = {
    "openapi": "3.0.3",
    "info": {
        "title": "Catalog API",
        "version": "1.2.0",
        "description": "Manage catalog items and widgets.",
    },
    "servers": [{"url": "https://api.example.com/v1"}, {"url": "https://staging.example.com/v1"}],
    "tags": [
        {"name": "items", "description": "Catalog items"},
        {"name": "inventory", "description": "Widget stock"},
    ],
    "paths": {
        "/items": {
            "get": {
                "operationId": "listItems",
                "summary": "List all items",
                "tags": ["items"],
                "parameters": [{"name": "limit", "in": "query", "schema": {"type": "integer"}}],
                "responses": {"200": _json_response("A page of items", {"type": "array", "items": _ref("ItemRecord")})},
            },
            "post": {
                "operationId": "createItem",
                "summary": "Create an item",
                "description": "Creates a new item in the catalog.",
                "tags": ["items"],
                "requestBody": {
                    "required": True,
                    "content": {"application/json": {"schema": _ref("NewItemRequest")}},
                },
                "responses": {
                    "201": _json_response("Created", _ref("ItemRecord")),
                    "400": _json_response("Bad request", _ref("ErrorResponse")),
                },
            },
        },
        "/items/{itemId}": {
            "parameters": [
                {"name": "itemId", "in": "path", "required": True, "schema": {"type": "string"}},
                {"name": "verbose", "in": "query", "schema": {"type": "boolean"}},
            ],
            "get": {
                "operationId": "getItem",
                "summary": "Get an item by id",
                "tags": ["items"],
                "parameters": [
                    {"name": "verbose", "in": "query", "description": "Include widget details", "schema": {"type": "boolean"}}
                ],
                "responses": {
                    "200": _json_response("The item", _ref("ItemRecord")),
                    "404": _json_response("Not found", _ref("ErrorResponse")),
                },
            },
            "delete": {
                "summary": "Delete an item",
                "tags": ["items"],
                "responses": {"204": {"description": "Deleted"}},
            },
        },
        "/widgets": {
            "get": {
                "operationId": "listWidgets",
                "summary": "List widgets",
                "tags": ["inventory"],
                "responses": {"200": _json_response("All widgets", {"type": "array", "items": _ref("Widget")})},
            },
            "put": {
                "operationId": "replaceWidgets",
                "summary": "Replace all widgets",
                "tags": ["inventory"],
                "requestBody": {"content": {"application/json": {"schema": {"type": "array", "items": _ref("Widget")}}}},
                "responses": {"200": {"description": "Replaced"}},
            },
        },
        "/legacy": {
            "get": {
                "operationId": "getLegacy",
                "summary": "Legacy lookup",
                "responses": {"200": _json_response("Legacy payload", _ref("Missing"))},
            }
        },
    },
    "components": {
        "schemas": {
            "ItemRecord": {
                "type": "object",
                "description": "A catalog item",
                "required": ["id", "name"],
                "properties": {
                    "id": {"type": "string", "description": "Item identifier"},
                    "name": {"type": "string", "description": "Display name"},
                    "widget": _ref("Widget"),
                },
            },
            "NewItemRequest": {
                "type": "object",
                "description": "Payload for creating an item",
                "required": ["name"],
                "properties": {"name": {"type": "string", "description": "Display name"}},
            },
            "Widget": {
                "type": "object",
                "description": "A widget attached to items",
                "required": ["id"],
                "properties": {
                    "id": {"type": "string"},
                    "color": {"type": "string", "description": "Widget color"},
                    "components": {"type": "array", "items": _ref("WidgetPart")},
                },
            },
            "WidgetPart": {
                "type": "object",
                "description": "One component of a widget",
                "properties": {"sku": {"type": "string"}},
            },
            "ErrorResponse": {
                "type": "object",
                "description": "Error details",
                "required": ["message"],
                "properties": {"message": {"type": "string", "description": "Human readable message"}},
            },
        }
    },
}


@pytest.fixture
def spec_data():
    """A fresh copy of the catalog API description."""
    return copy.deepcopy(CATALOG_SPEC)


@pytest.fixture
def spec_file(tmp_path, spec_data):
    """The catalog API description written to a JSON file."""
    path = tmp_path / "openapi.json"
    path.write_text(json.dumps(spec_data), encoding="utf-8")
    return path


@pytest.fixture
def specification(spec_data):
    return SpecLoader().load_data(spec_data, source_path="catalog.json")


@pytest.fixture
def spec_index(specification):
    return SpecIndex.build(specification, HashingEmbedder())


@pytest.fixture
def resources(spec_index):
    """Shared resources with the catalog index attached."""
    shared = SharedResources()
    shared.attach(spec_index, RetrieverConfig())
    return shared
