class InvalidParameter(ValueError):
    # Raised while building geometry from out-of-range dimensions.
    # Scene setup treats it as fatal: nothing is rendered from a partially built scene.
    pass
