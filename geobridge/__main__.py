import json
import sys

import click

from geobridge.bridge import LocationBridge
from geobridge.channel import FutureResult, MethodChannel, serve_stream
from geobridge.constants import GET_CURRENT_LOCATION
from geobridge.location.types import PermissionState
from geobridge.logging import set_log_level
from geobridge.platform import DesktopPlatform, DummyPlatform, PermissionStore
from geobridge.settings import GeoBridgeSettings


def build_platform(settings: GeoBridgeSettings, dummy: bool):
    if dummy:
        return DummyPlatform.demo()
    return DesktopPlatform.from_settings(settings)


@click.group()
@click.option("--log-level", default=None, help="Set logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
@click.pass_context
def cli(ctx, log_level):
    settings = GeoBridgeSettings(log_level=log_level)
    set_log_level(settings.log_level)
    ctx.obj = settings


@cli.command()
@click.option("--dummy", is_flag=True, default=False, help="Use the in-memory demo platform instead of this host")
@click.option("--method", default=GET_CURRENT_LOCATION, show_default=True, help="Method name to call")
@click.pass_obj
def locate(settings, dummy, method):
    """Make one location request and print the reply as JSON."""
    platform = build_platform(settings, dummy)
    bridge = LocationBridge(platform)
    result = FutureResult()

    bridge.handle(method, result)
    platform.process_events()

    if not result.future.done():
        # The platform owns the prompt; without an answer there is nothing to print
        raise click.ClickException("Location permission request was not answered")

    reply = result.reply()
    click.echo(json.dumps(reply.to_dict()))
    sys.exit(0 if reply.is_success else 1)


@cli.command()
@click.option("--dummy", is_flag=True, default=False, help="Use the in-memory demo platform instead of this host")
@click.option("--input", "input_file", type=click.File("r"), default="-", help="JSON-lines call stream")
@click.option("--output", "output_file", type=click.File("w"), default="-", help="JSON-lines reply stream")
@click.pass_obj
def serve(settings, dummy, input_file, output_file):
    """Serve the location channel over JSON lines."""
    platform = build_platform(settings, dummy)
    channel = MethodChannel(settings.channel_name)
    LocationBridge(platform).register(channel)
    serve_stream(channel, input_file, output_file, platform=platform)


@cli.group()
def permission():
    """Inspect or change the stored location permission."""


@permission.command("status")
def permission_status():
    state = PermissionStore().get_state()
    click.echo(state.value if state is not None else "unknown")


@permission.command("grant")
def permission_grant():
    PermissionStore().set_state(PermissionState.GRANTED)


@permission.command("deny")
def permission_deny():
    PermissionStore().set_state(PermissionState.DENIED)


@permission.command("reset")
def permission_reset():
    PermissionStore().reset()


if __name__ == "__main__":
    cli()
