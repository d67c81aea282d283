"""Deploy command implementation"""

import sys

import click

from ..utils.output import console, format_deploy_result, print_error
from ...api.exceptions import ArtifactDeployError


@click.command()
@click.option('--name', help='Artifact name')
@click.option('--location', 'artifact_location', help='Artifact location (URL, coordinate or path)')
@click.option('--version', 'version', help="Version to deploy, or 'latest'")
@click.option('--checksum', help='Expected artifact checksum')
@click.option('--deploy-to', 'deploy_to', help='Deploy target directory')
@click.option('--keep', type=click.IntRange(min=0), help='Previous releases to keep')
@click.option('--force', is_flag=True, help='Re-extract even if the release is intact')
@click.pass_context
def deploy(ctx, name, artifact_location, version, checksum, deploy_to, keep, force):
    """Deploy an artifact release

    Reads artifact-deploy.yaml; options replace the file's values.

    The deploy target is laid out as:

        deploy_to/
        ├── current -> releases/1.2.0
        ├── shared/
        └── releases/
            ├── 1.1.0/
            └── 1.2.0/
                └── manifest.yaml

    Examples:

        # Deploy the configured version
        artifact-deploy deploy

        # Deploy the newest repository version
        artifact-deploy deploy --version latest

        # Re-extract an intact release
        artifact-deploy deploy --version 1.2.0 --force
    """
    overrides = {
        "name": name,
        "artifact_location": artifact_location,
        "version": version,
        "checksum": checksum,
        "deploy_to": deploy_to,
        "keep": keep,
        "force": True if force else None,
    }

    try:
        deployer = ctx.obj.create_deployer(overrides)

        with console.status(f"[cyan]Deploying {deployer.config.name}...[/cyan]"):
            result = deployer.deploy()

        format_deploy_result(result)

    except ArtifactDeployError as e:
        print_error(str(e), e)
        sys.exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Deployment cancelled[/yellow]")
        sys.exit(1)
