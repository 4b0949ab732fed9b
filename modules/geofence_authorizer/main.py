"""Geofence Authorizer Module Entry Point

Command-line interface for checking a feature geometry against a team's
assigned boundaries, using the same workflow the feature creation route runs.
"""

import argparse
import json
import sys
from typing import Any, Dict, Optional

from src.config.config_loader import ConfigLoader
from src.exceptions import FieldOpsBaseException, FieldOpsValidationError
from src.utils import get_logger, log_performance, setup_logging
from .authorization import (
    FeatureCreationGuard,
    GeometryError,
    NoBoundariesAssignedError,
    NotPermittedError,
    http_status_for,
)
from .models import GeofenceConfig, UserRole
from .stores import InMemoryBoundaryStore

logger = get_logger(__name__)

EXIT_PERMITTED = 0
EXIT_NOT_PERMITTED = 1
EXIT_NO_BOUNDARIES = 2
EXIT_GEOMETRY_ERROR = 3
EXIT_CONFIGURATION_ERROR = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Field Operations Geofence - Check a feature geometry against assigned boundaries"
    )
    parser.add_argument(
        "--boundaries",
        required=True,
        help="GeoJSON FeatureCollection or JSON list of boundary documents"
    )
    parser.add_argument(
        "--geometry",
        required=True,
        help="Candidate GeoJSON geometry as a JSON string, or @path to read it from a file"
    )
    parser.add_argument("--team-id", help="Team of the submitting user")
    parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.FIELD.value,
        help="Role of the submitting user (default: Field)"
    )
    parser.add_argument("--boundary-id", help="Boundary explicitly chosen by the user")
    parser.add_argument(
        "--environment",
        choices=["development", "production"],
        default="development",
        help="Environment configuration to use (default: development)"
    )
    parser.add_argument(
        "--config-dir",
        default="config",
        help="Directory containing environment_config.json (default: config)"
    )
    return parser


def _read_geometry(value: str) -> Any:
    if value.startswith("@"):
        with open(value[1:], 'r') as f:
            return json.load(f)
    return json.loads(value)


@log_performance
def check_geometry(guard: FeatureCreationGuard, request: Dict[str, Any]) -> Dict[str, Any]:
    """Run the authorization workflow and describe the decision."""
    authorized = guard.authorize_feature(request)
    return {
        "permitted": True,
        "boundaryId": authorized.boundary_id,
        "teamId": authorized.team_id,
        "summary": authorized.authorization.get_decision_summary(),
    }


def main(args: Optional[list] = None) -> int:
    """Main entry point for the geofence authorizer module.
    
    Args:
        args: Command line arguments (defaults to sys.argv)
        
    Returns:
        Exit code (0 when permitted, non-zero otherwise)
    """
    parsed_args = build_parser().parse_args(args)

    try:
        config_loader = ConfigLoader(parsed_args.config_dir)
        logging_config = config_loader.get_logging_config(parsed_args.environment)
        setup_logging(
            environment=parsed_args.environment,
            log_level=logging_config.get("level", "INFO"),
            log_dir=logging_config.get("log_dir"),
            stream=sys.stderr,
        )
        config = GeofenceConfig.from_config_loader(config_loader, parsed_args.environment)
        store = InMemoryBoundaryStore.from_file(parsed_args.boundaries)
        geometry = _read_geometry(parsed_args.geometry)
    except (FieldOpsBaseException, OSError, ValueError) as e:
        print(json.dumps({"permitted": False, "error": "configuration", "message": str(e)}))
        return EXIT_CONFIGURATION_ERROR

    guard = FeatureCreationGuard(store, config=config)
    request = {
        "geometry": geometry,
        "userRole": parsed_args.role,
        "teamId": parsed_args.team_id,
        "boundaryId": parsed_args.boundary_id,
    }

    outcomes = (
        (NotPermittedError, "not_permitted", EXIT_NOT_PERMITTED),
        (NoBoundariesAssignedError, "no_boundaries_assigned", EXIT_NO_BOUNDARIES),
        (GeometryError, "geometry", EXIT_GEOMETRY_ERROR),
        (FieldOpsValidationError, "invalid_request", EXIT_GEOMETRY_ERROR),
    )
    try:
        decision = check_geometry(guard, request)
    except FieldOpsBaseException as e:
        for error_type, label, exit_code in outcomes:
            if isinstance(e, error_type):
                print(json.dumps({
                    "permitted": False,
                    "error": label,
                    "status": http_status_for(e),
                    "message": str(e),
                }))
                return exit_code
        raise

    print(json.dumps(decision))
    return EXIT_PERMITTED


if __name__ == "__main__":
    sys.exit(main())
