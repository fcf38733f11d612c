"""Split an incoming multipart form into parts that `requests` can re-send."""

from starlette.datastructures import FormData, UploadFile


async def split_form(
    form: FormData,
) -> tuple[dict[str, tuple[str, bytes, str]], dict[str, str]]:
    files: dict[str, tuple[str, bytes, str]] = {}
    data: dict[str, str] = {}
    for name, value in form.multi_items():
        if isinstance(value, UploadFile):
            files[name] = (
                value.filename or name,
                await value.read(),
                value.content_type or "application/octet-stream",
            )
        else:
            data[name] = value
    return files, data
