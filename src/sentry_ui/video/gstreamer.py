import logging

_gstreamer_available = False
_gstreamer_check_done = False


def _do_gstreamer_check() -> bool:
    try:
        import gi
        gi.require_version('Gst', '1.0')
        from gi.repository import Gst
        Gst.init(None)

        if not Gst.ElementFactory.find("udpsrc"):
            logging.info("GStreamer player not available: missing 'udpsrc' element")
            return False

        return True

    except (ImportError, ValueError) as e:
        logging.info(f"GStreamer player not available: {e}")
        return False

    except Exception as e:
        logging.warning(f"GStreamer initialization failed: {e}")
        return False


def is_gstreamer_available() -> bool:
    """Check if the GStreamer player can be used.

    This performs a lazy check on first call, caching the result.
    Checks for:
    - PyGObject (gi) module
    - GStreamer initialization
    - The udpsrc element the pipeline starts with
    """
    global _gstreamer_available, _gstreamer_check_done

    if not _gstreamer_check_done:
        _gstreamer_available = _do_gstreamer_check()
        _gstreamer_check_done = True

    return _gstreamer_available
