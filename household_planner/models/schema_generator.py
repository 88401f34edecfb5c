"""
JSON Schema export for forecast configurations.

Lets front ends and other tools validate a forecast configuration before
handing it to the planner.
"""

import json
from pathlib import Path
from typing import Any, Dict, Type, Union

from pydantic import BaseModel

from .household import ForecastConfig

JSON_SCHEMA_DRAFT = "http://json-schema.org/draft-07/schema#"
FORECAST_CONFIG_TITLE = "Household Forecast Configuration"
FORECAST_CONFIG_DESCRIPTION = (
    "Two-earner household incomes, expenses, assets, mortgage, children and "
    "growth assumptions for a year-by-year forecast"
)


def generate_schema(
    model: Type[BaseModel], title: str, description: str
) -> Dict[str, Any]:
    """JSON schema for a model, tagged with the draft, a title and a description."""
    schema = model.model_json_schema()
    schema["$schema"] = JSON_SCHEMA_DRAFT
    schema["title"] = title
    schema["description"] = description
    return schema


def generate_forecast_config_schema() -> Dict[str, Any]:
    """Generate JSON schema for the ForecastConfig model."""
    return generate_schema(
        ForecastConfig, FORECAST_CONFIG_TITLE, FORECAST_CONFIG_DESCRIPTION
    )


def save_forecast_config_schema(output_path: Union[str, Path]) -> Path:
    """
    Write the forecast configuration schema to a file.

    Missing parent directories are created.

    Returns:
        The path written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(generate_forecast_config_schema(), indent=2))
    return output_path


if __name__ == "__main__":
    target = Path(__file__).parents[2] / "schema" / "forecast_config.json"
    print(f"Schema saved to {save_forecast_config_schema(target)}")
