"""Verify command implementation"""

import sys

import click

from ..utils.output import format_verification_result, print_error
from ...api.exceptions import ArtifactDeployError


@click.command()
@click.argument('version', required=False)
@click.option('--deploy-to', 'deploy_to', help='Deploy target directory')
@click.pass_context
def verify(ctx, version, deploy_to):
    """Check a release against its manifest

    VERSION defaults to the current release. Exits with status 1 when any
    file recorded in the manifest is missing or modified.
    """
    try:
        deployer = ctx.obj.create_deployer({"deploy_to": deploy_to})
        result = deployer.verify(version)
        format_verification_result(result)

    except ArtifactDeployError as e:
        print_error(str(e), e)
        sys.exit(1)

    if result.drifted:
        sys.exit(1)
