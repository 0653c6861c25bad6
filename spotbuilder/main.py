import click
from .commands import *


@click.group()
@click.option("--path", "-p", default=".", help="Path to the directory holding spotbuilder.toml.")
@click.pass_context
def cli(ctx, path):
    """SpotBuilder: build and launch spotify_player with inline image support."""
    ctx.obj = {"path": path}

cli.add_command(features)
cli.add_command(install)
cli.add_command(launch)
cli.add_command(image_protocol)
cli.add_command(doctor)
cli.add_command(init)
cli.add_command(config)
cli.add_command(log)
cli.add_command(version)

if __name__ == '__main__':
    try:
        cli()
    except Exception as e:
        click.echo(f"An unexpected error occurred: {e}", err=True)
        click.echo("Please report this issue to the SpotBuilder developers.", err=True)
