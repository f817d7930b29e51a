"""CLI entry point for the render template generator."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from . import __version__
from .config import config
from .errors import PipelineError
from .models import CaptionConfig, CaptionPlacement, RenderTemplate, ScenePlan, TemplateRequest

app = typer.Typer(
    name="reelgen",
    help="AI-assisted render template generator for voice-over videos",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"reelgen version {__version__}")
        raise typer.Exit()


def _load_request(path: Path) -> TemplateRequest:
    try:
        return TemplateRequest.from_yaml(path)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        typer.echo(f"❌ Invalid request {path}: {e}")
        raise typer.Exit(1)


def _report_failure(error: PipelineError) -> None:
    typer.echo(f"❌ {error}")
    for key, value in error.context.items():
        typer.echo(f"   {key}: {value}")


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """reelgen - Turn a script and video clips into a render template."""
    pass


@app.command()
def generate(
    request_file: Path = typer.Argument(
        ...,
        help="Request YAML/JSON: script, assets, voice_id, caption_config...",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    output: Path = typer.Option(
        Path("template.json"),
        "--output",
        "-o",
        help="Output template file path"
    ),
    plan_output: Optional[Path] = typer.Option(
        None,
        "--plan-output",
        help="Also save the validated scene plan (YAML)"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Generate a validated render template from a request file."""
    from .pipeline import TemplatePipeline

    setup_logging(verbose)
    request = _load_request(request_file)

    try:
        config.validate_required()
    except ValueError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    typer.echo(f"🎬 Generating template from {request_file}")
    typer.echo(f"   Assets: {len(request.assets)}")
    typer.echo(f"   Voice: {request.voice_id}")

    try:
        result = asyncio.run(TemplatePipeline().generate(request))
    except PipelineError as e:
        _report_failure(e)
        raise typer.Exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(result.document, indent=2, ensure_ascii=False))
    typer.echo(f"\n✅ Template saved: {output}")

    if plan_output:
        result.plan.to_yaml(plan_output)
        typer.echo(f"✅ Scene plan saved: {plan_output}")

    typer.echo("\n📽️  Scenes:")
    for scene in result.plan.scenes:
        trim = ""
        if scene.video_asset.is_trimmed:
            trim = f" [{scene.video_asset.trim_start}s +{scene.video_asset.trim_duration}s]"
        typer.echo(f"   {scene.scene_number}. {scene.video_asset.title or scene.video_asset.id}{trim}")


@app.command()
def plan(
    request_file: Path = typer.Argument(
        ...,
        help="Request YAML/JSON",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    output: Path = typer.Option(
        Path("plan.yaml"),
        "--output",
        "-o",
        help="Output scene plan path"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Plan scenes only: planning, duration repair and URL reconciliation."""
    from .pipeline import TemplatePipeline

    setup_logging(verbose)
    request = _load_request(request_file)

    try:
        config.validate_required()
    except ValueError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    try:
        scene_plan = asyncio.run(TemplatePipeline().plan(request))
    except PipelineError as e:
        _report_failure(e)
        raise typer.Exit(1)

    output.parent.mkdir(parents=True, exist_ok=True)
    scene_plan.to_yaml(output)
    typer.echo(f"✅ Scene plan saved: {output} ({len(scene_plan.scenes)} scenes)")


@app.command("check-durations")
def check_durations(
    plan_file: Path = typer.Argument(
        ...,
        help="Scene plan YAML/JSON",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    request_file: Optional[Path] = typer.Option(
        None,
        "--request",
        "-r",
        help="Request file whose assets provide full clip lengths"
    ),
    factor: Optional[float] = typer.Option(
        None,
        "--factor",
        help="Seconds per word (defaults to REELGEN_WORDS_TO_SECONDS)",
        min=0.01
    ),
    margin: Optional[float] = typer.Option(
        None,
        "--margin",
        help="Usable fraction of each clip (defaults to REELGEN_SAFETY_MARGIN)",
        min=0.01,
        max=1.0
    ),
) -> None:
    """Report scenes whose narration is too long for their video."""
    from .validators import DurationSettings, validate_scene_durations

    try:
        scene_plan = ScenePlan.from_yaml(plan_file)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        typer.echo(f"❌ Invalid scene plan {plan_file}: {e}")
        raise typer.Exit(1)

    assets = _load_request(request_file).assets if request_file else []
    defaults = DurationSettings.from_config()
    settings = DurationSettings(
        words_to_seconds_factor=factor or defaults.words_to_seconds_factor,
        safety_margin=margin or defaults.safety_margin,
    )

    violations = validate_scene_durations(scene_plan, assets, settings)
    if not violations:
        typer.echo(f"✅ All {len(scene_plan.scenes)} scenes fit their videos")
        return

    typer.echo(f"⚠️  {len(violations)} duration violations:")
    for violation in violations:
        typer.echo(f"   • {violation.describe()}")
    raise typer.Exit(1)


@app.command()
def postprocess(
    template_file: Path = typer.Argument(
        ...,
        help="Render template JSON",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    voice_id: str = typer.Option(
        ...,
        "--voice-id",
        help="Voice every narration element must use"
    ),
    no_captions: bool = typer.Option(
        False,
        "--no-captions",
        help="Remove every caption element"
    ),
    preset: Optional[str] = typer.Option(
        None,
        "--preset",
        "-p",
        help="Caption preset (see 'reelgen presets')"
    ),
    placement: CaptionPlacement = typer.Option(
        CaptionPlacement.BOTTOM,
        "--placement",
        help="Caption position"
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output path (defaults to overwriting the input)"
    ),
) -> None:
    """Apply the deterministic template fixes and the structure check."""
    from .editor import postprocess_template
    from .validators import validate_template_structure

    try:
        caption_config = CaptionConfig(enabled=not no_captions, preset_id=preset, placement=placement)
        template = RenderTemplate.from_document(json.loads(template_file.read_text()))
        postprocess_template(template, voice_id=voice_id, caption_config=caption_config)
        document = template.to_document()
        validate_template_structure(document)
    except json.JSONDecodeError as e:
        typer.echo(f"❌ Invalid JSON in {template_file}: {e}")
        raise typer.Exit(1)
    except PipelineError as e:
        _report_failure(e)
        raise typer.Exit(1)

    destination = output or template_file
    destination.write_text(json.dumps(document, indent=2, ensure_ascii=False))
    typer.echo(f"✅ Template saved: {destination}")


@app.command()
def presets() -> None:
    """List the available caption presets."""
    from .editor import PRESETS

    typer.echo("🎨 Caption presets:")
    for name, style in PRESETS.items():
        typer.echo(f"   • {name}: {style.transcript_effect} ({style.transcript_color})")


if __name__ == "__main__":
    app()
