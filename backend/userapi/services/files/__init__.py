from userapi.services.files.storage import FileService, decode_base64_image, detect_image_type

__all__ = ["FileService", "decode_base64_image", "detect_image_type"]
