"""
FastAPI Backend Server for the Humanized Trajectory Generator

Serves generated paths as JSON point arrays for automation clients.
"""

import os
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from htg_package import GeneratorConfig, PredictionUnavailable, TrajectoryGenerator, load_config

app = FastAPI(title="Humanized Trajectory Generator API")

# Enable CORS for browser-based clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request/Response models
class TrajectoryRequest(BaseModel):
    start: List[int]
    end: List[int]
    randomness: Optional[float] = None
    density: Optional[int] = None


class TrajectoryResponse(BaseModel):
    success: bool
    trajectory: Optional[List[List[int]]] = None
    control_points: Optional[List[List[int]]] = None
    smoothed: Optional[bool] = None


_generator: Optional[TrajectoryGenerator] = None


def get_generator() -> TrajectoryGenerator:
    """Shared generator; the model session is loaded once and reused."""
    global _generator
    if _generator is None:
        config_file = os.environ.get("HTG_CONFIG")
        config = load_config(config_file) if config_file else GeneratorConfig()
        _generator = TrajectoryGenerator(config)
    return _generator


@app.get("/")
async def root():
    return {
        "message": "Humanized Trajectory Generator API",
        "version": "1.0.0",
        "endpoints": {
            "POST /api/trajectory": "Generate a human-like path between two points"
        }
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}


@app.post("/api/trajectory", response_model=TrajectoryResponse)
def generate(request: TrajectoryRequest, generator: TrajectoryGenerator = Depends(get_generator)):
    """
    Generate a dense, smoothed path from request.start to request.end.

    The trajectory is returned as a list of [x, y] integer pairs.
    """
    if len(request.start) != 2 or len(request.end) != 2:
        raise HTTPException(
            status_code=400,
            detail="start and end must be [x, y] pairs"
        )
    if request.randomness is not None and request.randomness < 0:
        raise HTTPException(status_code=400, detail="randomness must be >= 0")

    try:
        result = generator.generate_trajectory(
            start=request.start,
            end=request.end,
            randomness=request.randomness,
            density=request.density,
        )
    except PredictionUnavailable as e:
        raise HTTPException(status_code=503, detail=f"Prediction unavailable: {str(e)}")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid input: {str(e)}")
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Internal server error: {str(e)}"
        )

    return TrajectoryResponse(
        success=True,
        trajectory=[[x, y] for x, y in result.path],
        control_points=[[x, y] for x, y in result.control_points],
        smoothed=result.smoothed,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
