# cli.py
import click
import logging
from pydantic import ValidationError
from image_gateway.config.settings import get_settings
from image_gateway.main import run

# Configure logging
logger = logging.getLogger(__name__)

@click.group()
def cli():
    """CLI commands for the Image Gateway"""
    pass

@cli.command()
def serve():
    """Start the gateway on the configured host and port"""
    run()

@cli.command()
def show_config():
    """Show current configuration"""
    try:
        settings = get_settings()
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    click.echo("Current Configuration:")
    click.echo(f"  S3 Bucket: {settings.s3_bucket}")
    click.echo(f"  AWS Region: {settings.aws_region or '(default chain)'}")
    click.echo(f"  AWS Endpoint: {settings.aws_endpoint_url or '(default)'}")
    click.echo(f"  API Token: {settings.masked_api_token}")
    click.echo(f"  Listen: {settings.host}:{settings.port}")
    click.echo(f"  Log Level: {settings.log_level}")

if __name__ == "__main__":
    cli()
