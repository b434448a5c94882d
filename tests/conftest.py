"""Shared fixtures for the generator tests."""

from __future__ import annotations

from typing import Any

import pytest

from thanix.generator.template_engine import RustTemplateEngine

WIDGET_SPEC_YAML = """\
openapi: 3.0.3
info:
  title: Widget API
  version: 1.2.0
paths:
  /widgets/{id}:
    get:
      description: Fetch one widget.
      parameters:
        - name: id
          in: path
          required: true
          schema:
            type: integer
      responses:
        "200":
          description: The widget.
          content:
            application/json:
              schema:
                $ref: "#/components/schemas/Widget"
components:
  schemas:
    Widget:
      type: object
      required:
        - name
      properties:
        name:
          type: string
        count:
          type: integer
          nullable: true
  securitySchemes:
    tokenAuth:
      type: apiKey
      in: header
      name: Authorization
"""


@pytest.fixture
def widget_spec_yaml() -> str:
    return WIDGET_SPEC_YAML


@pytest.fixture
def minimal_spec() -> dict[str, Any]:
    """Smallest document the parser accepts."""
    return {
        "openapi": "3.0.3",
        "info": {"title": "Test API", "version": "1.0.0"},
        "paths": {},
        "components": {"schemas": {}},
    }


@pytest.fixture
def template_engine() -> RustTemplateEngine:
    return RustTemplateEngine()
