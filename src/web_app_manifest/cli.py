import json
import logging
from pathlib import Path

import click
import yaml
from pydantic import ValidationError

from web_app_manifest.errors import ManifestError
from web_app_manifest.services.config_loader import load_batch_config
from web_app_manifest.services.manifest_loader import dump_manifest, load_manifest, write_manifest


class AliasedGroup(click.Group):
    _aliases = {"p": "process", "b": "batch"}

    def get_command(self, ctx, cmd_name):
        return super().get_command(ctx, self._aliases.get(cmd_name, cmd_name))


@click.group(cls=AliasedGroup)
def cli():
    """Web Application Manifest processor."""
    pass


@cli.command("process")
@click.option("--input", "-i", "input_file", required=True, type=click.Path(exists=True, path_type=Path), help="Manifest file (JSON or YAML)")
@click.option("--document-url", "-d", required=True, help="URL of the document that links the manifest")
@click.option("--manifest-url", "-m", required=True, help="URL the manifest was fetched from")
@click.option("--out", "-o", default=None, type=click.Path(path_type=Path), help="Output JSON file path (default: stdout)")
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
def process(input_file, document_url, manifest_url, out, verbose):
    """Resolve manifest URLs and check origin and scope."""
    _setup_logging(verbose)
    try:
        manifest = _load_manifest(input_file)
        _process_manifest(manifest, document_url, manifest_url, input_file)

        if out:
            write_manifest(manifest, out)
            click.echo(f"Manifest written to {out}")
        else:
            click.echo(json.dumps(dump_manifest(manifest), indent=2, ensure_ascii=False))

    except click.ClickException:
        raise
    except Exception as e:
        raise click.ClickException(str(e))


@cli.command("batch")
@click.option("--config", "-c", required=True, type=click.Path(exists=True, path_type=Path), help="Path to YAML batch config file")
@click.option("--out", "-o", required=True, type=click.Path(path_type=Path), help="Output directory for processed manifests")
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
def batch(config, out, verbose):
    """Process every manifest listed in a batch config."""
    _setup_logging(verbose)
    try:
        batch_config = _load_config(config)

        out_dir = Path(out)
        out_dir.mkdir(parents=True, exist_ok=True)

        rejected = 0
        used_names: set[str] = set()
        for index, entry in enumerate(batch_config.manifests):
            out_name = entry.out or f"{entry.path.stem}.json"
            if out_name in used_names:
                renamed = f"{Path(out_name).stem}_{index}.json"
                click.echo(
                    f"WARNING: duplicate output name '{out_name}', "
                    f"using filename '{renamed}' to avoid collision",
                    err=True,
                )
                out_name = renamed
            used_names.add(out_name)

            try:
                manifest = _load_manifest(entry.path)
                _process_manifest(manifest, entry.document_url, entry.manifest_url, entry.path)
            except click.ClickException as e:
                click.echo(f"REJECTED: {e.format_message()}", err=True)
                rejected += 1
                continue

            out_file = out_dir / out_name
            write_manifest(manifest, out_file)
            click.echo(f"Manifest written to {out_file}")

        if rejected:
            raise click.ClickException(
                f"{rejected} of {len(batch_config.manifests)} manifests rejected"
            )

    except click.ClickException:
        raise
    except Exception as e:
        raise click.ClickException(str(e))


def _setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _format_validation_error(e: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(x) for x in err['loc'])}: {err['msg']}"
        for err in e.errors()
    )


def _load_manifest(path: Path):
    try:
        return load_manifest(path)
    except json.JSONDecodeError as e:
        raise click.ClickException(f"Invalid JSON in manifest file {path}: {e}")
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in manifest file {path}: {e}")
    except ValidationError as e:
        raise click.ClickException(
            f"Manifest validation error in {path}: {_format_validation_error(e)}"
        )
    except (OSError, ValueError) as e:
        raise click.ClickException(f"Cannot read manifest {path}: {e}")


def _process_manifest(manifest, document_url: str, manifest_url: str, path: Path):
    try:
        manifest.process(document_url, manifest_url)
    except ManifestError as e:
        raise click.ClickException(f"Manifest {path} rejected: {e}")


def _load_config(config_path: Path):
    try:
        return load_batch_config(config_path)
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML in config file {config_path}: {e}")
    except ValidationError as e:
        raise click.ClickException(
            f"Config validation error in {config_path}: {_format_validation_error(e)}"
        )
