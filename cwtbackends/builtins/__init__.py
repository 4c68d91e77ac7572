from .pywt_morlet import TransformBackend as PywtMorletBackend

BUILTIN_BACKENDS = {
    "builtin:pywt_morlet": "cwtbackends.builtins.pywt_morlet",
}
