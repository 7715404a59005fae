from .buffer_repository import BufferRepository
from .image_repository import ImageRepository
