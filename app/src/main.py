"""FastAPI web app for driving a curveland session from the browser."""

import asyncio
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.requests import Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from curveland.config import load_config
from curveland.output import FileExporter, export_still, media_type_for_output_format
from curveland.trace import FrameDriver, MotionState, RenderContext, Session

logger = logging.getLogger(__name__)

config = load_config()
render_context = RenderContext.default().with_canvas(config.canvas_width, config.canvas_height)
templates = Jinja2Templates(directory=Path(__file__).parent / "templates")


class CommandRequest(BaseModel):
    line: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own one session and tick it at the configured rate while the app runs."""
    session = Session(mode=config.mode, exporter=FileExporter(config.export_dir, render_context))
    driver = FrameDriver(session, fps=config.fps)
    stop_event = asyncio.Event()
    runner = asyncio.create_task(driver.run_paced(stop_event))
    app.state.session = session
    try:
        yield
    finally:
        stop_event.set()
        await runner
        session.close()


app = FastAPI(title="Curveland", lifespan=lifespan)


def _state_payload(session: Session) -> dict:
    state: MotionState = session.state
    return {
        "frame_count": state.frame_count,
        "started": state.started,
        "speed": state.speed,
        "position": {"x": state.position.x, "y": state.position.y},
        "velocity": {"x": state.velocity.x, "y": state.velocity.y},
        "bounds": {
            "min_x": state.bounds.min_x,
            "max_x": state.bounds.max_x,
            "min_y": state.bounds.min_y,
            "max_y": state.bounds.max_y,
        },
        "path_length": len(state.path),
        "loops": [loop.describe() for loop in session.loops],
        "history": list(session.history),
    }


@app.get("/", response_class=HTMLResponse)
async def index(request: Request):
    """Serve the main page."""
    session: Session = request.app.state.session
    return templates.TemplateResponse(
        request,
        "index.html",
        {"loops": list(session.loops), "history": session.history, "mode": session.mode.value},
    )


@app.post("/api/commands")
async def submit_command(command: CommandRequest, request: Request):
    """Submit one input line, exactly as typed into the input box."""
    session: Session = request.app.state.session
    submission = session.submit(command.line)
    if submission.error is not None:
        raise HTTPException(status_code=400, detail=str(submission.error))
    return {
        "line": submission.line,
        "commands": [str(parsed) for parsed in submission.commands],
        "loop_id": submission.loop_id,
        "frame_count": session.state.frame_count,
    }


@app.get("/api/state")
async def get_state(request: Request):
    """Return the current motion state, loops and history."""
    return _state_payload(request.app.state.session)


@app.get("/api/export/{output_format}")
async def export(output_format: str, request: Request):
    """Return the current trace as a PNG or SVG image."""
    if output_format not in ("png", "svg"):
        raise HTTPException(status_code=400, detail="Invalid format. Choose from: png, svg")
    session: Session = request.app.state.session
    try:
        encoded = export_still(session.state, output_format, render_context)
    except (ValueError, ArithmeticError) as e:
        logger.error("Export of %s failed: %s", output_format, e)
        raise HTTPException(status_code=422, detail=f"Cannot export trace: {e}")
    return Response(
        content=encoded,
        media_type=media_type_for_output_format(output_format),
        headers={"Content-Disposition": f"inline; filename=curveland.{output_format}"},
    )
