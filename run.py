import os
from getver import create_app

app = create_app()

if __name__ == '__main__':
    # Debug/reloader off by default; enable with GETVER_DEBUG_SERVER=1
    debug_flag = os.environ.get('GETVER_DEBUG_SERVER', '0') == '1'
    port = int(os.environ.get('GETVER_PORT', '5000'))
    app.run(host=os.environ.get('GETVER_HOST', '127.0.0.1'), port=port,
            debug=debug_flag, use_reloader=debug_flag)
