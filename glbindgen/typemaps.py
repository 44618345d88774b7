"""Fixed native type tables, per API family.

Hand-maintained, never derived from a registry. Each table maps a native
type name to the ctypes expression emitted inside the generated `types`
class body; expressions may refer to names defined earlier in the same table.
"""

from __future__ import annotations

import re

from .registry import Api

# ===--- Type alias tables ---=== #

KHRONOS_TYPES: tuple[tuple[str, str], ...] = (
    ("khronos_int8_t", "ctypes.c_int8"),
    ("khronos_uint8_t", "ctypes.c_uint8"),
    ("khronos_int16_t", "ctypes.c_int16"),
    ("khronos_uint16_t", "ctypes.c_uint16"),
    ("khronos_int32_t", "ctypes.c_int32"),
    ("khronos_uint32_t", "ctypes.c_uint32"),
    ("khronos_int64_t", "ctypes.c_int64"),
    ("khronos_uint64_t", "ctypes.c_uint64"),
    ("khronos_float_t", "ctypes.c_float"),
    ("khronos_intptr_t", "ctypes.c_ssize_t"),
    ("khronos_uintptr_t", "ctypes.c_size_t"),
    ("khronos_ssize_t", "ctypes.c_ssize_t"),
    ("khronos_usize_t", "ctypes.c_size_t"),
    ("khronos_utime_nanoseconds_t", "ctypes.c_uint64"),
    ("khronos_stime_nanoseconds_t", "ctypes.c_int64"),
)

GL_TYPES: tuple[tuple[str, str], ...] = (
    ("GLenum", "ctypes.c_uint32"),
    ("GLboolean", "ctypes.c_uint8"),
    ("GLbitfield", "ctypes.c_uint32"),
    ("GLbyte", "ctypes.c_int8"),
    ("GLubyte", "ctypes.c_uint8"),
    ("GLshort", "ctypes.c_int16"),
    ("GLushort", "ctypes.c_uint16"),
    ("GLint", "ctypes.c_int32"),
    ("GLuint", "ctypes.c_uint32"),
    ("GLclampx", "ctypes.c_int32"),
    ("GLsizei", "ctypes.c_int32"),
    ("GLfloat", "ctypes.c_float"),
    ("GLclampf", "ctypes.c_float"),
    ("GLdouble", "ctypes.c_double"),
    ("GLclampd", "ctypes.c_double"),
    ("GLchar", "ctypes.c_char"),
    ("GLcharARB", "ctypes.c_char"),
    ("GLhandleARB", "ctypes.c_uint32"),
    ("GLhalf", "ctypes.c_uint16"),
    ("GLhalfARB", "ctypes.c_uint16"),
    ("GLhalfNV", "ctypes.c_uint16"),
    ("GLfixed", "ctypes.c_int32"),
    ("GLintptr", "ctypes.c_ssize_t"),
    ("GLintptrARB", "ctypes.c_ssize_t"),
    ("GLsizeiptr", "ctypes.c_ssize_t"),
    ("GLsizeiptrARB", "ctypes.c_ssize_t"),
    ("GLint64", "ctypes.c_int64"),
    ("GLint64EXT", "ctypes.c_int64"),
    ("GLuint64", "ctypes.c_uint64"),
    ("GLuint64EXT", "ctypes.c_uint64"),
    ("GLsync", "ctypes.c_void_p"),
    ("GLeglImageOES", "ctypes.c_void_p"),
    ("GLeglClientBufferEXT", "ctypes.c_void_p"),
    ("GLvdpauSurfaceNV", "ctypes.c_ssize_t"),
    (
        "GLDEBUGPROC",
        "_FUNCTYPE(None, GLenum, GLenum, GLuint, GLenum, GLsizei, "
        "POINTER(GLchar), ctypes.c_void_p)",
    ),
    ("GLDEBUGPROCARB", "GLDEBUGPROC"),
    ("GLDEBUGPROCKHR", "GLDEBUGPROC"),
    (
        "GLDEBUGPROCAMD",
        "_FUNCTYPE(None, GLuint, GLenum, GLenum, GLsizei, "
        "POINTER(GLchar), ctypes.c_void_p)",
    ),
    ("GLVULKANPROCNV", "_FUNCTYPE(None)"),
)

GLX_TYPES: tuple[tuple[str, str], ...] = (
    ("Bool", "ctypes.c_int"),
    ("Status", "ctypes.c_int"),
    ("XID", "ctypes.c_ulong"),
    ("VisualID", "ctypes.c_ulong"),
    ("Pixmap", "ctypes.c_ulong"),
    ("Font", "ctypes.c_ulong"),
    ("Window", "ctypes.c_ulong"),
    ("Colormap", "ctypes.c_ulong"),
    ("Display", "ctypes.c_void_p"),
    ("XVisualInfo", "ctypes.c_void_p"),
    ("GLXFBConfig", "ctypes.c_void_p"),
    ("GLXFBConfigSGIX", "ctypes.c_void_p"),
    ("GLXContext", "ctypes.c_void_p"),
    ("GLXContextID", "ctypes.c_ulong"),
    ("GLXFBConfigID", "ctypes.c_ulong"),
    ("GLXFBConfigIDSGIX", "ctypes.c_ulong"),
    ("GLXDrawable", "ctypes.c_ulong"),
    ("GLXPixmap", "ctypes.c_ulong"),
    ("GLXWindow", "ctypes.c_ulong"),
    ("GLXPbuffer", "ctypes.c_ulong"),
    ("GLXPbufferSGIX", "ctypes.c_ulong"),
    ("GLXVideoCaptureDeviceNV", "ctypes.c_ulong"),
    ("GLXVideoDeviceNV", "ctypes.c_uint"),
    ("GLXVideoSourceSGIX", "ctypes.c_ulong"),
    ("GLXextFuncPtr", "_FUNCTYPE(None)"),
)

WGL_TYPES: tuple[tuple[str, str], ...] = (
    ("BOOL", "ctypes.c_int"),
    ("BYTE", "ctypes.c_uint8"),
    ("CHAR", "ctypes.c_char"),
    ("COLORREF", "ctypes.c_uint32"),
    ("DWORD", "ctypes.c_uint32"),
    ("FLOAT", "ctypes.c_float"),
    ("INT", "ctypes.c_int"),
    ("INT32", "ctypes.c_int32"),
    ("INT64", "ctypes.c_int64"),
    ("UINT", "ctypes.c_uint"),
    ("USHORT", "ctypes.c_ushort"),
    ("LPCSTR", "ctypes.c_char_p"),
    ("LPVOID", "ctypes.c_void_p"),
    ("HANDLE", "ctypes.c_void_p"),
    ("HDC", "ctypes.c_void_p"),
    ("HENHMETAFILE", "ctypes.c_void_p"),
    ("HGLRC", "ctypes.c_void_p"),
    ("HGPUNV", "ctypes.c_void_p"),
    ("HPBUFFERARB", "ctypes.c_void_p"),
    ("HPBUFFEREXT", "ctypes.c_void_p"),
    ("HPVIDEODEV", "ctypes.c_void_p"),
    ("HVIDEOINPUTDEVICENV", "ctypes.c_void_p"),
    ("HVIDEOOUTPUTDEVICENV", "ctypes.c_void_p"),
    ("PROC", "ctypes.c_void_p"),
    ("LPGLYPHMETRICSFLOAT", "ctypes.c_void_p"),
    ("LPLAYERPLANEDESCRIPTOR", "ctypes.c_void_p"),
    ("PIXELFORMATDESCRIPTOR", "ctypes.c_void_p"),
    ("LPPIXELFORMATDESCRIPTOR", "ctypes.c_void_p"),
    ("PGPU_DEVICE", "ctypes.c_void_p"),
)

EGL_TYPES: tuple[tuple[str, str], ...] = (
    ("EGLBoolean", "ctypes.c_uint32"),
    ("EGLenum", "ctypes.c_uint32"),
    ("EGLint", "khronos_int32_t"),
    ("EGLAttrib", "ctypes.c_ssize_t"),
    ("EGLAttribKHR", "ctypes.c_ssize_t"),
    ("EGLTime", "khronos_utime_nanoseconds_t"),
    ("EGLTimeKHR", "khronos_utime_nanoseconds_t"),
    ("EGLTimeNV", "khronos_utime_nanoseconds_t"),
    ("EGLuint64KHR", "khronos_uint64_t"),
    ("EGLuint64NV", "khronos_utime_nanoseconds_t"),
    ("EGLnsecsANDROID", "khronos_stime_nanoseconds_t"),
    ("EGLsizeiANDROID", "khronos_ssize_t"),
    ("EGLNativeFileDescriptorKHR", "ctypes.c_int"),
    ("EGLConfig", "ctypes.c_void_p"),
    ("EGLContext", "ctypes.c_void_p"),
    ("EGLDisplay", "ctypes.c_void_p"),
    ("EGLSurface", "ctypes.c_void_p"),
    ("EGLClientBuffer", "ctypes.c_void_p"),
    ("EGLImage", "ctypes.c_void_p"),
    ("EGLImageKHR", "ctypes.c_void_p"),
    ("EGLSync", "ctypes.c_void_p"),
    ("EGLSyncKHR", "ctypes.c_void_p"),
    ("EGLSyncNV", "ctypes.c_void_p"),
    ("EGLStreamKHR", "ctypes.c_void_p"),
    ("EGLDeviceEXT", "ctypes.c_void_p"),
    ("EGLOutputLayerEXT", "ctypes.c_void_p"),
    ("EGLOutputPortEXT", "ctypes.c_void_p"),
    ("EGLLabelKHR", "ctypes.c_void_p"),
    ("EGLObjectKHR", "ctypes.c_void_p"),
    ("EGLNativeDisplayType", "ctypes.c_void_p"),
    ("EGLNativePixmapType", "ctypes.c_void_p"),
    ("EGLNativeWindowType", "ctypes.c_void_p"),
    ("NativeDisplayType", "EGLNativeDisplayType"),
    ("NativePixmapType", "EGLNativePixmapType"),
    ("NativeWindowType", "EGLNativeWindowType"),
    (
        "EGLDEBUGPROCKHR",
        "_FUNCTYPE(None, EGLenum, ctypes.c_char_p, EGLint, EGLLabelKHR, "
        "EGLLabelKHR, ctypes.c_char_p)",
    ),
    (
        "EGLSetBlobFuncANDROID",
        "_FUNCTYPE(None, ctypes.c_void_p, EGLsizeiANDROID, ctypes.c_void_p, "
        "EGLsizeiANDROID)",
    ),
    (
        "EGLGetBlobFuncANDROID",
        "_FUNCTYPE(EGLsizeiANDROID, ctypes.c_void_p, EGLsizeiANDROID, "
        "ctypes.c_void_p, EGLsizeiANDROID)",
    ),
)

_GL_FAMILY = {Api.GL, Api.GLCORE, Api.GLES1, Api.GLES2, Api.GLSC2}

CALLBACK_TYPES: frozenset[str] = frozenset(
    {
        "GLDEBUGPROC",
        "GLDEBUGPROCARB",
        "GLDEBUGPROCKHR",
        "GLDEBUGPROCAMD",
        "GLVULKANPROCNV",
        "GLXextFuncPtr",
        "EGLDEBUGPROCKHR",
        "EGLSetBlobFuncANDROID",
        "EGLGetBlobFuncANDROID",
    }
)
"""Function-pointer types whose values the debug strategy never formats."""


_TYPE_REF_RE = re.compile(r"\btypes\.(\w+)")


def is_callback_type(descriptor: str) -> bool:
    """True when a type descriptor refers to a callback type."""
    return any(name in CALLBACK_TYPES for name in _TYPE_REF_RE.findall(descriptor))


def type_alias_table(api: Api) -> tuple[tuple[str, str], ...]:
    """Return the ordered (name, ctypes expression) table for an API."""
    if api in _GL_FAMILY:
        return GL_TYPES
    if api is Api.GLX:
        return GL_TYPES + GLX_TYPES
    if api is Api.WGL:
        return GL_TYPES + WGL_TYPES
    return KHRONOS_TYPES + EGL_TYPES


def type_aliases(api: Api) -> dict[str, str]:
    return dict(type_alias_table(api))


# ===--- Per-API metadata ---=== #

_DEFAULT_ENUM_TYPES = {
    Api.GLX: "GLint",
    Api.WGL: "GLint",
    Api.EGL: "EGLenum",
}

_DISPLAY_NAMES = {
    Api.GLX: "GLX",
    Api.WGL: "WGL",
    Api.EGL: "EGL",
}

_NO_ERROR_VALUES = {
    Api.EGL: 0x3000,  # EGL_SUCCESS
}

# Tried in order with ctypes.util.find_library; the first hit wins.
_LIBRARY_NAMES = {
    Api.GL: ("GL", "opengl32", "OpenGL"),
    Api.GLCORE: ("GL", "opengl32", "OpenGL"),
    Api.GLX: ("GL",),
    Api.WGL: ("opengl32",),
    Api.GLES1: ("GLESv1_CM", "GLES_CM"),
    Api.GLES2: ("GLESv2", "libGLESv2"),
    Api.GLSC2: ("GLESv2", "libGLESv2"),
    Api.EGL: ("EGL", "libEGL"),
}


def default_enum_type(api: Api) -> str:
    return _DEFAULT_ENUM_TYPES.get(api, "GLenum")


def display_name(api: Api) -> str:
    return _DISPLAY_NAMES.get(api, "OpenGL")


def no_error_value(api: Api) -> int:
    return _NO_ERROR_VALUES.get(api, 0)


def error_name(api: Api) -> str:
    """Family named in error reports; only EGL has its own error query."""
    return "EGL" if api is Api.EGL else "GL"


def library_names(api: Api) -> tuple[str, ...]:
    return _LIBRARY_NAMES[api]
