from .tensor import compile_commands_tensor, compile_frame_tensor

__all__ = ["compile_commands_tensor", "compile_frame_tensor"]
