from __future__ import annotations
import typer, asyncio, logging, cv2
from rich import print
from rich.logging import RichHandler
from pathlib import Path
from typing import Optional
from .config import load_config
from .io.camera import frames
from .pipeline import PupilPipeline
from .runtime.events import FrameEvent, ws_broadcast
from .gui.overlay import draw_candidates, show, close

app = typer.Typer(add_completion=False, help="purekit CLI (pure): PuRe pupil candidate detection")
logger = logging.getLogger("purekit")

def _setup_logging(level: str):
    logging.basicConfig(level=level.upper(), format="%(message)s", datefmt="[%X]",
                        handlers=[RichHandler(rich_tracebacks=True)])

@app.command()
def run(source: str = typer.Argument("0", help="camera index or video path"),
        config: Optional[str] = typer.Option(None, help="YAML pipeline config"),
        show_frames: bool = typer.Option(False, "--show", help="display accepted segments"),
        draw_ellipse: bool = typer.Option(False, help="also draw fitted ellipses"),
        ws: Optional[str] = typer.Option(None, help="broadcast events on host:port"),
        log_level: str = typer.Option("warning")):
    """
    Process a camera or video and print one JSON line per frame; optionally broadcast over WebSocket.
    """
    _setup_logging(log_level)
    cfg = load_config(config)
    pipe = PupilPipeline(cfg)
    queue: "asyncio.Queue[str]" = asyncio.Queue()

    async def producer():
        for f in frames(source, cfg.width, cfg.height):
            idx = f["meta"]["index"]
            try:
                res = pipe(f["image"])
            except ValueError as e:
                logger.warning("frame %d skipped: %s", idx, e)
                continue
            ev = FrameEvent.build(idx, (cfg.width, cfg.height), len(res.segments), res.candidates)
            line = ev.model_dump_json()
            typer.echo(line)
            if ws: await queue.put(line)
            if show_frames and not show(draw_candidates(res.gray, res.candidates, draw_ellipse)):
                break
            # let the broadcaster drain the queue
            await asyncio.sleep(0)
        if show_frames: close()

    async def main():
        if ws:
            host, _, port = ws.rpartition(":")
            bcast = asyncio.create_task(ws_broadcast(queue, host or "0.0.0.0", int(port)))
            await producer()
            bcast.cancel()
        else:
            await producer()

    asyncio.run(main())

@app.command()
def image(path: str,
          config: Optional[str] = typer.Option(None, help="YAML pipeline config"),
          out: Optional[str] = typer.Option(None, help="write overlay image here"),
          draw_ellipse: bool = typer.Option(True),
          log_level: str = typer.Option("warning")):
    """
    Detect pupil candidates in a single still image.
    """
    _setup_logging(log_level)
    frame = cv2.imread(path)
    if frame is None:
        raise typer.BadParameter(f"cannot read image {path}")
    cfg = load_config(config)
    res = PupilPipeline(cfg)(frame)
    typer.echo(FrameEvent.build(0, (cfg.width, cfg.height), len(res.segments), res.candidates).model_dump_json())
    if out:
        cv2.imwrite(str(Path(out)), draw_candidates(res.gray, res.candidates, draw_ellipse))
        print("[green]Saved overlay[/green]", out)

if __name__ == "__main__":
    app()
