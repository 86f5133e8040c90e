import os
import re
import tempfile
import uuid

from flask import Flask, abort, jsonify, render_template, request, send_file

from routica.core.analyzer import analyze_project
from routica.errors import AnalysisError
from routica.exporter.csv_exporter import export_to_csv

app = Flask(__name__)
EXPORT_FOLDER = os.getenv("ROUTICA_EXPORT_DIR") or tempfile.mkdtemp()
CSV_NAME = "routes.csv"
RE_TOKEN = re.compile(r"[0-9a-f]{32}")


def _csv_path(token):
    return os.path.join(EXPORT_FOLDER, f"routes-{token}.csv")


@app.route("/", methods=["GET", "POST"])
def index():
    routes = []
    error = None
    warning = None
    token = None
    directory = ""
    if request.method == "POST":
        directory = request.form.get("directory", "").strip()
        if not directory:
            warning = "No project directory given."
        else:
            try:
                result = analyze_project(directory)
            except AnalysisError as e:
                app.logger.error("Analysis failed: %s", e.message)
                error = e.message
            else:
                routes = result.routes
                # each analysis gets its own export file
                token = uuid.uuid4().hex
                export_to_csv(routes, _csv_path(token))

    return render_template(
        "index.html",
        routes=routes,
        directory=directory,
        error=error,
        warning=warning,
        token=token,
        analyzed=token is not None,
    )


@app.route("/download/<token>")
def download(token):
    if not RE_TOKEN.fullmatch(token):
        abort(404)
    path = _csv_path(token)
    if not os.path.exists(path):
        abort(404)
    return send_file(path, as_attachment=True, download_name=CSV_NAME)


@app.route("/api/routes")
def api_routes():
    directory = request.args.get("directory", "").strip()
    if not directory:
        return jsonify({"error": "missing 'directory' parameter"}), 400
    try:
        result = analyze_project(directory)
    except AnalysisError as e:
        return jsonify({"error": e.message}), 422
    return jsonify(result.to_dict())


if __name__ == "__main__":
    app.run(debug=True)
