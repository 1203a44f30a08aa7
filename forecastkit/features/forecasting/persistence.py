"""ForecastModel persistence as camelCase JSON files.

The JSON written here is the same wire form the browser app stores:
config, result, trained, trainingData and createdAt (ISO-8601).

SECURITY: load_forecast_model can be confined to a base directory.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import ValidationError as PydanticValidationError

from forecastkit.core.exceptions import ValidationError
from forecastkit.features.forecasting.schemas import ForecastModel

logger = structlog.get_logger()


def save_forecast_model(model: ForecastModel, path: str | Path) -> Path:
    """Save a forecast model snapshot to disk.

    Args:
        model: Snapshot to save.
        path: File path (will add .json extension if missing).

    Returns:
        Path to saved file.

    Raises:
        OSError: If unable to create directory or write file.
    """
    path = Path(path)
    if not path.suffix:
        path = path.with_suffix(".json")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(model.to_json(indent=2), encoding="utf-8")

    logger.info(
        "forecasting.model_saved",
        path=str(path),
        method=model.config.method,
        config_hash=model.config.config_hash(),
        created_at=model.created_at.isoformat(),
    )

    return path


def load_forecast_model(path: str | Path, base_dir: str | Path | None = None) -> ForecastModel:
    """Load a forecast model snapshot from disk.

    Args:
        path: Path to saved snapshot.
        base_dir: Optional base directory for path validation. If provided,
            the resolved path must be within this directory.

    Returns:
        Loaded ForecastModel.

    Raises:
        FileNotFoundError: If path doesn't exist.
        ValueError: If path is outside the allowed base directory.
        ValidationError: If the file does not hold a valid snapshot.
    """
    path = Path(path).resolve()

    if base_dir is not None:
        base_path = Path(base_dir).resolve()
        try:
            path.relative_to(base_path)
        except ValueError:
            logger.warning(
                "forecasting.model_load_rejected",
                path=str(path),
                base_dir=str(base_path),
                reason="path_outside_allowed_directory",
            )
            raise ValueError(
                f"Model path '{path}' is outside the allowed artifacts directory "
                f"'{base_path}'."
            ) from None

    if not path.exists():
        raise FileNotFoundError(f"Forecast model not found: {path}")

    try:
        model = ForecastModel.from_json(path.read_bytes())
    except PydanticValidationError as exc:
        logger.warning(
            "forecasting.model_load_invalid",
            path=str(path),
            error_count=exc.error_count(),
        )
        raise ValidationError(
            f"Invalid forecast model file: {path}",
            details={"errors": [str(err.get("msg", "")) for err in exc.errors()]},
        ) from exc

    logger.info(
        "forecasting.model_loaded",
        path=str(path),
        method=model.config.method,
        created_at=model.created_at.isoformat(),
    )

    return model
