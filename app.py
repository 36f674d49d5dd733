"""Flask web app — decode X12 uploads to JSON or Excel."""

import logging
import os
import uuid

from flask import Flask, request, send_file, jsonify

from edi_parser import EDIFile
from excel_writer import write_segments_excel
from segment_catalog import default_registry, transaction_name
from x12_errors import X12Error

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config.update(
    MAX_CONTENT_LENGTH=50 * 1024 * 1024,  # 50 MB limit
    DATA_CHECKS=True,
    BOUNDS_CHECKS=False,
    SKIP_ERRORS=True,
    INCLUDE_RAW=False,
)
# X12_DATA_CHECKS=false etc. override the defaults (values are parsed as JSON)
app.config.from_prefixed_env("X12")

UPLOAD_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "uploads")

REGISTRY = default_registry()


@app.route("/")
def index():
    return jsonify({
        "service": "x12-segment-decoder",
        "segments": sorted(REGISTRY.codes()),
        "options": {
            "data_checks": app.config["DATA_CHECKS"],
            "bounds_checks": app.config["BOUNDS_CHECKS"],
            "skip_errors": app.config["SKIP_ERRORS"],
        },
    })


@app.route("/decode", methods=["POST"])
def decode():
    documents, errors = _read_documents()
    if not documents:
        return _no_documents(errors)

    results = []
    for filename, edi in documents:
        txn_type = edi.get_transaction_type()
        results.append({
            "filename": filename,
            "separators": edi.separators.as_dict(),
            "transaction_type": txn_type,
            "transaction_name": transaction_name(txn_type) if txn_type else None,
            "segments": [r.as_dict() for r in edi.records],
            "errors": [{"index": i, "error": msg} for i, msg in edi.errors],
        })
    return jsonify({"documents": results, "errors": errors})


@app.route("/upload", methods=["POST"])
def upload():
    documents, errors = _read_documents()
    if not documents:
        return _no_documents(errors)

    if len(documents) == 1:
        base_name = os.path.splitext(documents[0][0])[0]
        output_filename = f"{base_name}_segments.xlsx"
    else:
        output_filename = "combined_segments.xlsx"

    os.makedirs(UPLOAD_DIR, exist_ok=True)
    output_path = os.path.join(UPLOAD_DIR, f"{uuid.uuid4().hex}_{output_filename}")
    write_segments_excel(documents, output_path)

    response = send_file(
        output_path,
        as_attachment=True,
        download_name=output_filename,
        mimetype="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )

    @response.call_on_close
    def cleanup():
        try:
            os.remove(output_path)
        except OSError:
            logger.warning("Could not remove %s", output_path)

    return response


def _read_documents():
    """Decode every uploaded file (or the ``text`` form field).

    Returns (documents, errors): documents is a list of (filename, EDIFile),
    errors a list of messages for files that could not be decoded.
    """
    sources = []
    for file in request.files.getlist("files"):
        if not file.filename:
            continue
        raw = file.read()
        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError:
            content = raw.decode("latin-1")
        sources.append((file.filename, content))

    text = request.form.get("text")
    if text:
        sources.append(("text", text))

    documents = []
    errors = []
    for filename, content in sources:
        if not content.strip():
            errors.append(f"{filename}: File is empty")
            continue
        try:
            edi = EDIFile(
                content,
                registry=REGISTRY,
                data_checks=app.config["DATA_CHECKS"],
                bounds_checks=app.config["BOUNDS_CHECKS"],
                skip_errors=app.config["SKIP_ERRORS"],
                include_raw=app.config["INCLUDE_RAW"],
            )
        except X12Error as e:
            logger.warning("Rejected %s: %s", filename, e)
            errors.append(f"{filename}: {e}")
            continue
        documents.append((filename, edi))
    return documents, errors


def _no_documents(errors):
    msg = "No valid X12 files found."
    if errors:
        msg += " Errors: " + "; ".join(errors)
    return jsonify({"error": msg}), 400


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    print("=" * 56)
    print("  X12 Segment Decoder")
    print("  POST /decode for JSON, POST /upload for Excel")
    print("  Listening on http://127.0.0.1:5000")
    print("=" * 56)
    app.run(debug=True, port=5000)
