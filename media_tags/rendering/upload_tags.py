"""
Upload widgets: file inputs for direct uploads and signed upload forms.
"""

import json
from typing import Any, Dict, Mapping, Optional

from media_tags.config import MediaConfig, get_config
from media_tags.delivery.signing import RequestSigner
from media_tags.delivery.urls import DeliveryUrlBuilder
from media_tags.models import ResourceType
from media_tags.rendering.attributes import html_attrs
from media_tags.utils.tag_logger import get_logger


UPLOAD_INPUT_CLASS = "cloudinary-fileupload"


class UploadTagRenderer:
    """Renders upload inputs and forms posting straight to the upload API."""

    def __init__(
        self,
        config: Optional[MediaConfig] = None,
        url_builder: Optional[DeliveryUrlBuilder] = None,
        signer: Optional[RequestSigner] = None
    ):
        """
        Initialize the renderer.

        Args:
            config: Account configuration (defaults to the environment).
            url_builder: Builds the upload API endpoint.
            signer: Signs upload parameters.
        """
        self.config = config or get_config()
        self.url_builder = url_builder or DeliveryUrlBuilder(self.config)
        self.signer = signer or RequestSigner(self.config, self.url_builder)
        self.logger = get_logger()

    def upload_url(self, options: Optional[Mapping[str, Any]] = None) -> str:
        """Upload endpoint; chunked when a chunk_size is given."""
        options = dict(options or {})
        if not options.get("resource_type"):
            options["resource_type"] = ResourceType.AUTO.value
        endpoint = "upload_chunked" if "chunk_size" in options else "upload"
        return self.url_builder.api_url(endpoint, options)

    def upload_params(self, options: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Upload parameters for a request.

        Unsigned requests (`unsigned` option) only drop empty values; all
        others are signed.
        """
        params = self.signer.build_upload_params(options)
        if options.get("unsigned"):
            return {key: value for key, value in params.items() if value is not None and value != ""}
        return self.signer.sign_request(params, options)

    def upload_tag_params(self, options: Optional[Mapping[str, Any]] = None) -> str:
        """Upload parameters as the JSON payload of data-form-data."""
        return json.dumps(self.upload_params(options or {}))

    def upload_tag(self, field: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Generate a file <input> wired for direct upload.

        Args:
            field: Name of the form field receiving the upload result.
            options: Upload options; `html` holds extra input attributes.

        Returns:
            The <input .../> markup.
        """
        options = dict(options or {})
        html_options = dict(options.get("html") or {})

        classes = [UPLOAD_INPUT_CLASS]
        if "class" in html_options:
            classes.insert(0, html_options.pop("class"))

        try:
            tag_options = {
                **html_options,
                "type": "file",
                "name": "file",
                "data-url": self.upload_url(options),
                "data-form-data": self.upload_tag_params(options),
                "data-cloudinary-field": field,
                "class": " ".join(classes),
            }
        except ValueError as e:
            self.logger.log_error("upload", e)
            raise

        if "chunk_size" in options:
            tag_options["data-max-chunk-size"] = options["chunk_size"]

        html = "<input " + html_attrs(tag_options) + "/>"
        self.logger.log_markup("upload", field, html)
        return html

    def image_upload_tag(self, field: str, options: Optional[Mapping[str, Any]] = None) -> str:
        return self.upload_tag(field, options)

    def unsigned_image_upload_tag(
        self,
        field: str,
        upload_preset: str,
        options: Optional[Mapping[str, Any]] = None
    ) -> str:
        """Upload input using an unsigned upload preset."""
        return self.image_upload_tag(
            field,
            {**(options or {}), "unsigned": True, "upload_preset": upload_preset}
        )

    def form_tag(self, callback_url: str, options: Optional[Mapping[str, Any]] = None) -> str:
        """
        Generate a signed multipart upload form.

        Args:
            callback_url: URL the service redirects to after the upload.
            options: Upload options; `form` holds extra form attributes.

        Returns:
            The <form>...</form> markup with one hidden input per parameter.
        """
        options = {**(options or {}), "callback_url": callback_url}
        form_options = options.get("form") or {}

        try:
            params = self.signer.sign_request(self.signer.build_upload_params(options), options)
            api_url = self.url_builder.api_url("upload", options)
        except ValueError as e:
            self.logger.log_error("form", e)
            raise

        form = (
            f"<form enctype='multipart/form-data' action='{api_url}' method='POST' "
            + html_attrs(form_options)
            + ">\n"
        )
        for key, value in params.items():
            form += "<input " + html_attrs({"name": key, "value": value, "type": "hidden"}) + "/>\n"
        form += "</form>\n"

        self.logger.log_markup("form", callback_url, form)
        return form
