"""
Terminal UI

Session state, focus handling, input dispatch and the curses renderer.
"""
