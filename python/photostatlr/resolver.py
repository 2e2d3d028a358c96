from loguru import logger

from photostatlr import config as export_config
from photostatlr import constants
from photostatlr import exceptions
from photostatlr.albums import AlbumCheckList
from photostatlr.pathutils import extension, get_publish_path
from photostatlr.template import NameTemplate, Template


class PublishPathResolver:
    """
    Computes the upload destinations of the photos of one export or publish
    batch and collects the albums to check for emptiness at the end of it.
    """

    def __init__(self, config, log=None):
        """
        :raise ConfigError: if the configuration is invalid
        :param dict config: Export configuration, see config.DEFAULTS
        :param log:         Logger, defaults to loguru's
        """
        self._config = export_config.validate_config(config)
        self._log = log or logger
        self._album_template = Template(self._config['dstRoot'] or '', log=self._log)
        self._filename_template = None
        if self._config['renameDstFile']:
            self._filename_template = NameTemplate(self._config['dstFilename'], log=self._log)
        self._album_check_list = AlbumCheckList(log=self._log)

    def __repr__(self):
        return 'PublishPathResolver(album={!r}, filename={!r})'.format(
            self._album_template, self._filename_template
        )

    @property
    def album_check_list(self):
        """
        :rtype: AlbumCheckList
        """
        return self._album_check_list

    @property
    def album_template(self):
        """
        :rtype: Template
        """
        return self._album_template

    @property
    def config(self):
        """
        :rtype: dict
        """
        return self._config.copy()

    @property
    def filename_template(self):
        """
        :rtype: NameTemplate|None
        """
        return self._filename_template

    def album_for(self, photo):
        """
        Destination album of the photo, dstRoot with all placeholders evaluated

        :param photo: Host photo object
        :rtype: str
        """
        return self._album_template.evaluate(photo)

    def filename_for(self, photo, rendered_filename):
        """
        Upload filename of a rendered photo. If files are renamed, the
        evaluated filename template gets the extension of the rendered file.

        :raise FormatError: if the filename template can't be evaluated to a
            valid filename
        :param photo:                   Host photo object
        :param str  rendered_filename:
        :rtype: str
        """
        if self._filename_template is None:
            return rendered_filename

        filename = self._filename_template.evaluate(photo)
        if not filename or filename == constants.MANDATORY_MISSING:
            raise exceptions.FormatError('Invalid filename {!r} from template {!r} for {}'.format(
                filename, self._filename_template.pattern, photo.get_raw_metadata('path')
            ))
        ext = extension(rendered_filename)
        return '{}.{}'.format(filename, ext) if ext else filename

    def resolve(self, photo, rendered_filename):
        """
        :raise FormatError: if the upload filename is invalid
        :param photo:                   Host photo object
        :param str  rendered_filename:
        :rtype: tuple[str, str]
        :return: Tuple of (local relative path, remote absolute path)
        """
        dst_root = self.album_for(photo)
        filename = self.filename_for(photo, rendered_filename)
        return get_publish_path(photo, filename, self._config, dst_root)

    def note_removed(self, remote_path):
        """
        Notes the album of a removed or moved photo for the empty album check

        :param str  remote_path:
        :rtype: AlbumCheckList
        """
        return self._album_check_list.note_album(remote_path)
