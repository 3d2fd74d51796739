
import argparse
import logging
import sys
from pathlib import Path

from botocore.exceptions import BotoCoreError, ClientError

from taskdef_render.config import (
    input_default,
    resolve_output_dir,
    resolve_region,
    resolve_revision,
)
from taskdef_render.errors import TaskDefinitionRenderError
from taskdef_render.outputs import report_failure, set_outputs
from taskdef_render.render import (
    MULTI_CONTAINER,
    SINGLE_CONTAINER,
    VARIANTS,
    RenderRequest,
    TaskDefinitionRenderer,
)

logger = logging.getLogger(__name__)


def _add_input(parser, flag, input_name, help_text, fallback=None):
    # CLI flag, then INPUT_* from the host, then the environment fallback
    default = input_default(input_name) or fallback
    parser.add_argument(flag, default=default, required=default is None, help=help_text)


def _add_common_arguments(parser):
    _add_input(parser, "--region", "aws-region", "AWS region", fallback=resolve_region())
    _add_input(parser, "--cluster", "aws-cluster-name", "ECS cluster name")
    _add_input(parser, "--service", "aws-service-name", "ECS service name")
    _add_input(parser, "--image", "docker-image", "Container image to deploy (e.g. repo/image:tag)")
    _add_input(parser, "--app-env", "app-env", "Deployment environment label, e.g. prod")
    _add_input(parser, "--build-number", "docker-build-number", "Build number of the image")
    parser.add_argument(
        "--revision", default=resolve_revision(),
        help="Source revision recorded as GIT_REVISION (default: $GITHUB_SHA or 'unknown')"
    )
    parser.add_argument(
        "--output-dir", default=resolve_output_dir(), type=Path,
        help="Directory for the rendered file (default: $RUNNER_TEMP, $GITHUB_WORKSPACE, $PWD, then cwd)"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="tdr", description="Render the next ECS task definition revision for a service"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    multi_parser = subparsers.add_parser(
        MULTI_CONTAINER.name,
        help="Update the first named container and report all container names",
    )
    _add_common_arguments(multi_parser)

    single_parser = subparsers.add_parser(
        SINGLE_CONTAINER.name,
        help="Update the sole container using a named credential profile",
    )
    _add_common_arguments(single_parser)
    _add_input(single_parser, "--profile", "aws-profile", "Local AWS credential profile name")

    return parser.parse_args(argv)


def main_logic(args):
    variant = VARIANTS[args.command]
    ecs = variant.client_factory(args.region, getattr(args, "profile", None))

    request = RenderRequest(
        cluster=args.cluster,
        service=args.service,
        image=args.image,
        app_env=args.app_env,
        build_number=args.build_number,
        revision=args.revision,
        output_dir=args.output_dir,
    )
    result = TaskDefinitionRenderer(ecs, variant).render(request)
    set_outputs(result.outputs())
    return result


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        main_logic(args)
    except (TaskDefinitionRenderError, ClientError, BotoCoreError, OSError) as e:
        logger.error(str(e))
        report_failure(str(e))
        return 1
    except Exception as e:
        logger.exception(f"Unexpected failure: {e}")
        report_failure(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
