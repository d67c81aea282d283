"""Prune command implementation"""

import sys

import click

from ..utils.output import format_prune_result, print_error
from ...api.exceptions import ArtifactDeployError


@click.command()
@click.option('--keep', type=click.IntRange(min=0), help='Previous releases to keep')
@click.option('--deploy-to', 'deploy_to', help='Deploy target directory')
@click.pass_context
def prune(ctx, keep, deploy_to):
    """Delete old releases

    Removes the oldest non-current releases (and their cached artifacts)
    until at most KEEP remain.

    Example:

        artifact-deploy prune --keep 1
    """
    try:
        deployer = ctx.obj.create_deployer({"deploy_to": deploy_to, "keep": keep})
        removed = deployer.prune()
        format_prune_result(removed, deployer.config.keep)

    except ArtifactDeployError as e:
        print_error(str(e), e)
        sys.exit(1)
