"""
Control-point predictor backends.

A predictor is any callable mapping the normalized input tensor (two 2D
points, shape [1, 2, 2]) to a numeric vector of even length (K 2D points in
the same normalized space). ``OnnxPredictor`` wraps a trained ONNX model
through ONNX Runtime.
"""

import logging
import numpy as np
from pathlib import Path
from typing import List, Optional, Protocol, Union

from .errors import PredictionFailed, PredictorUnavailable

logger = logging.getLogger(__name__)


class Predictor(Protocol):
    """Capability interface: ``predict(vector) -> vector``."""

    def __call__(self, inputs: np.ndarray) -> np.ndarray:
        ...


class OnnxPredictor:
    """
    ONNX Runtime predictor for the control-point model.

    The session is created lazily on first use and reused for later calls.
    Input and output tensors are the first ones declared by the model.
    """

    def __init__(self, model_path: Union[str, Path], device: str = "cpu",
                 intra_op_num_threads: Optional[int] = None):
        self.model_path = Path(model_path)
        self.device = device
        self.intra_op_num_threads = intra_op_num_threads

        self._session = None
        self._input_name: Optional[str] = None
        self._input_shape: Optional[List] = None
        self._output_name: Optional[str] = None

    @property
    def available(self) -> bool:
        """True when the model file exists (the session may not be loaded yet)."""
        return self.model_path.exists()

    def _providers(self) -> List[str]:
        providers = []
        if self.device == "cuda":
            providers.append("CUDAExecutionProvider")
        elif self.device == "dml":
            providers.append("DmlExecutionProvider")
        providers.append("CPUExecutionProvider")
        return providers

    def _load(self):
        """Create the inference session and read its tensor metadata."""
        if self._session is not None:
            return

        if not self.model_path.exists():
            raise PredictorUnavailable(
                f"ONNX model not found at '{self.model_path}'. "
                "Please ensure it's in the correct directory."
            )

        import onnxruntime as ort

        sess_options = ort.SessionOptions()
        sess_options.graph_optimization_level = ort.GraphOptimizationLevel.ORT_ENABLE_ALL
        if self.intra_op_num_threads:
            sess_options.intra_op_num_threads = self.intra_op_num_threads

        try:
            session = ort.InferenceSession(
                str(self.model_path),
                sess_options=sess_options,
                providers=self._providers(),
            )
        except Exception as e:
            raise PredictorUnavailable(f"Failed to load ONNX model '{self.model_path}': {e}") from e

        model_input = session.get_inputs()[0]
        self._input_name = model_input.name
        self._input_shape = list(model_input.shape)
        self._output_name = session.get_outputs()[0].name
        self._session = session

        logger.info("Loaded model: %s", self.model_path.name)
        logger.debug(
            "Providers: %s, input %s %s, output %s",
            session.get_providers(), self._input_name, self._input_shape, self._output_name,
        )

    def _shape_input(self, inputs: np.ndarray) -> np.ndarray:
        """Reshape to the model's declared shape when it is fully static."""
        arr = np.asarray(inputs, dtype=np.float32)
        shape = self._input_shape or []
        if shape and all(isinstance(dim, int) and dim > 0 for dim in shape):
            if int(np.prod(shape)) == arr.size:
                return arr.reshape(shape)
        return arr

    def __call__(self, inputs: np.ndarray) -> np.ndarray:
        self._load()

        feed = {self._input_name: self._shape_input(inputs)}
        outputs = self._session.run([self._output_name], feed)

        if not outputs or outputs[0] is None:
            raise PredictionFailed("Results are null")

        return np.asarray(outputs[0], dtype=np.float32).ravel()

    def get_model_info(self) -> dict:
        """Information about the loaded model."""
        self._load()
        return {
            "model_path": str(self.model_path),
            "device": self.device,
            "providers": self._session.get_providers(),
            "input": self._input_name,
            "input_shape": self._input_shape,
            "output": self._output_name,
        }
