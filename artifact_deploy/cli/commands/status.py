"""Status command implementation"""

import sys

import click

from ..utils.output import format_status, print_error
from ...api.exceptions import ArtifactDeployError


@click.command()
@click.option('--deploy-to', 'deploy_to', help='Deploy target directory')
@click.pass_context
def status(ctx, deploy_to):
    """Show installed releases

    Prints the current version, the retained releases oldest first, and
    the files of the current release that differ from its manifest.
    """
    try:
        deployer = ctx.obj.create_deployer({"deploy_to": deploy_to})
        format_status(deployer.status())

    except ArtifactDeployError as e:
        print_error(str(e), e)
        sys.exit(1)
