import argparse
import sys

from botocore.exceptions import BotoCoreError

from stepf_deploy.aws.base.aws_client import AWSClient
from stepf_deploy.cli.console import print_error, print_info, print_json, print_success
from stepf_deploy.config.deploy_config.deploy_config_handler import DeployConfigManager
from stepf_deploy.deploy.deploy_handler import StepFunctionsDeployer
from stepf_deploy.helpers.logger import setup_logging
from stepf_deploy.models.deployment import InvocationContext


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stepf-deploy",
        description="Deploy AWS Step Functions state machines defined in a serverless service file",
    )
    subparsers = parser.add_subparsers(dest="action", required=True)

    deploy_parser = subparsers.add_parser("deploy", help="Deploy Step functions")
    deploy_parser.add_argument(
        "-sm", "--statemachine", required=True, help="Name of the State Machine."
    )
    deploy_parser.add_argument("-s", "--stage", help="Stage of the service.")
    deploy_parser.add_argument("-r", "--region", help="Region of the service.")
    deploy_parser.add_argument(
        "--service-path", default=".", help="Directory holding serverless.yml (default: current directory)."
    )
    deploy_parser.add_argument("--profile", help="AWS credentials profile.")
    deploy_parser.add_argument("--json", action="store_true", help="Print the deploy result as JSON.")
    deploy_parser.add_argument("--log-level", help="Override the configured log level.")
    return parser


def main(argv=None) -> int:
    """
    Main entry point for the stepf-deploy command.

    :return: Process exit code, 0 on success.
    """
    args = build_parser().parse_args(argv)

    try:
        config = DeployConfigManager.get_config()
    except ValueError as e:
        print_error(f"Invalid configuration: {e}")
        return 1

    logger = setup_logging(
        log_dir=config.LOG_DIR,
        log_filename=config.LOG_FILENAME,
        log_level=args.log_level or config.LOG_LEVEL,
        log_destination=config.LOG_DESTINATION,
        force=True,
    )

    context = InvocationContext(
        statemachine=args.statemachine,
        stage=args.stage,
        region=args.region,
        service_path=args.service_path,
    )

    print_info("Start Deploy Step Functions")
    try:
        aws_client = AWSClient.from_config(config, region_name=args.region, profile_name=args.profile)
    except BotoCoreError as e:
        print_error(f"Deploy failed: {e}")
        return 1

    result = StepFunctionsDeployer(config, aws_client).deploy(context)

    if args.json:
        print_json(result.to_dict())
    elif result.success:
        print_success(f"Deployed {result.state_machine_arn}")
    else:
        print_error(f"Deploy failed: {result.reason}")

    if not result.success:
        logger.error(f"Deploy of '{context.statemachine}' did not complete")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
