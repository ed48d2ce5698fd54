"""Smoke test to verify the toolchain works."""


def test_import_cheerchaser():
    """Verify the cheerchaser package can be imported."""
    import cheerchaser

    assert cheerchaser.__version__


def test_subpackages_importable():
    """Verify all subpackages can be imported."""
    import cheerchaser.course
    import cheerchaser.planning
    import cheerchaser.routing
    import cheerchaser.storage

    assert cheerchaser.course is not None
    assert cheerchaser.planning is not None
    assert cheerchaser.routing is not None
    assert cheerchaser.storage is not None
