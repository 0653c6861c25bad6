import click
from .. import platform_probe
from ..cli_logger import logger
from ..features import resolve

@click.command()
@click.option("--verbose", "-v", is_flag=True, help="Show the detected platform facts (on stderr).")
def features(verbose):
    """Print the cargo feature string resolved for this machine.

    Only the feature string goes to stdout, so the output can be used as
    $(spotbuilder features).
    """
    with logger.console_to_stderr():
        facts = platform_probe.gather_platform_facts()
        if verbose:
            for line in platform_probe.describe_platform(facts):
                logger.step_info(line)
    click.echo(resolve(facts).as_feature_string())
