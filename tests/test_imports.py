def test_import_package():
    import todo_mcp  # noqa: F401


def test_error_shapes():
    from todo_mcp.shared.errors import ErrorKind, McpError

    err = McpError(ErrorKind.VALIDATION_ERROR, "nope")
    assert err.to_dict() == {"code": -32006, "message": "Request parameters failed validation", "data": "nope"}
    bare = McpError(ErrorKind.METHOD_NOT_FOUND)
    assert bare.to_dict() == {"code": -32601, "message": "Method not found"}


def test_error_codes_never_overlap():
    from todo_mcp.shared.errors import ErrorKind

    codes = [kind.code for kind in ErrorKind]
    assert len(codes) == len(set(codes)) == 12


def test_unknown_exception_maps_to_internal_error():
    from todo_mcp.shared.errors import ErrorKind, McpError, to_mcp_error

    err = to_mcp_error(RuntimeError("boom"))
    assert err.kind is ErrorKind.INTERNAL_ERROR
    assert err.data == "boom"
    original = McpError(ErrorKind.RATE_LIMITED)
    assert to_mcp_error(original) is original
