import time
from collections import namedtuple

from loguru import logger

from photostatlr import constants
from photostatlr import exceptions
from photostatlr.collections import get_all_published_collections
from photostatlr.dates import format_timestamp, to_timestamp
from photostatlr.host import ProgressScope

ConversionResult = namedtuple('ConversionResult', 'photos processed converted failed')


class ConversionSummary:
    def __init__(self, photos=0, processed=0, converted=0, failed=0, collections=0, elapsed=0.0):
        self.photos = photos
        self.processed = processed
        self.converted = converted
        self.failed = failed
        self.collections = collections
        self.elapsed = elapsed

    def __repr__(self):
        return ('ConversionSummary(photos={self.photos}, processed={self.processed}, '
                'converted={self.converted}, failed={self.failed}, '
                'collections={self.collections}, elapsed={self.elapsed:.1f})'.format(self=self))

    @property
    def rate(self):
        """
        Processed photos per second

        :rtype: float
        """
        return self.processed / self.elapsed if self.elapsed > 0 else 0.0

    @property
    def message(self):
        """
        :rtype: str
        """
        message = ('Photo StatLr: Processed {} of {} photos in {} collections, {} converted in {} seconds '
                   '({:.1f} pic/sec).'.format(self.processed, self.photos, self.collections,
                                              self.converted, int(self.elapsed + 0.5), self.rate))
        if self.failed:
            message += ' {} photos failed.'.format(self.failed)
        return message

    def add(self, result):
        """
        :param ConversionResult result:
        """
        self.photos += result.photos
        self.processed += result.processed
        self.converted += result.converted
        self.failed += result.failed


def make_backlink(published_collection, timestamp=None):
    """
    :param published_collection: Host published collection
    :param float timestamp: Publish time, defaults to now
    :rtype: str
    """
    if timestamp is None:
        timestamp = time.time()
    return '{}/{}'.format(published_collection.local_identifier, int(timestamp))


def is_converted(published_photo, published_collection):
    """
    Whether the backlink of a published photo already refers to the collection

    :rtype: bool
    """
    match = constants.PATTERN_BACKLINK.search(published_photo.remote_url or '')
    return match is not None and match.group(1) == str(published_collection.local_identifier)


def _log_already_converted(published_collection, published_photo):
    last_edited = to_timestamp(published_photo.photo.get_raw_metadata('lastEditTime'))
    match = constants.PATTERN_BACKLINK_TIME.search(published_photo.remote_url)
    last_published = float(match.group(1)) if match else None
    logger.info(
        'Convert({} - {}): already converted, lastEdited {}, lastPublished {}.',
        published_collection.name, published_photo.remote_id,
        format_timestamp(last_edited) if last_edited is not None else '-',
        format_timestamp(last_published) if last_published is not None else '-',
    )


def convert_collection(catalog, published_collection, progress_factory=ProgressScope):
    """
    Rewrites the backlinks of all photos in a published collection that don't
    refer to the collection yet. A photo whose update raises a PhotoStatLrError,
    eg, a write access timeout, is counted as failed and the conversion
    continues with the next photo. Any other exception propagates.

    :param catalog:                 Host catalog
    :param published_collection:    Host published collection
    :param progress_factory:        Callable returning a progress scope for a title
    :rtype: ConversionResult
    """
    published_photos = published_collection.get_published_photos()
    n_photos = len(published_photos)
    processed = converted = failed = 0

    title = "Converting collection '{}'".format(published_collection.name)
    with progress_factory(title) as progress:
        for idx, published_photo in enumerate(published_photos, 1):
            if progress.is_canceled():
                logger.info('Convert({}): canceled after {} photos', published_collection.name, processed)
                break

            if is_converted(published_photo, published_collection):
                _log_already_converted(published_collection, published_photo)
            else:
                try:
                    with catalog.with_write_access('Update Backlink', timeout=constants.WRITE_ACCESS_TIMEOUT):
                        published_photo.set_remote_url(make_backlink(published_collection))
                except exceptions.PhotoStatLrError as exc:
                    failed += 1
                    logger.warning('Convert({} - {}): failed: {}',
                                   published_collection.name, published_photo.remote_id, exc)
                else:
                    converted += 1
                    logger.info('Convert({} - {}): converted to new format.',
                                published_collection.name, published_photo.remote_id)

            processed = idx
            progress.set_portion_complete(processed, n_photos)

    return ConversionResult(n_photos, processed, converted, failed)


def convert_all_photos(catalog, plugin_id, progress_factory=ProgressScope):
    """
    Converts the backlinks of all published collections of all publish
    services of the plugin.

    :param catalog:             Host catalog
    :param str plugin_id:
    :param progress_factory:    Callable returning a progress scope for a title
    :rtype: ConversionSummary
    """
    logger.info('ConvertAllPhotos: starting')
    summary = ConversionSummary()

    publish_services = catalog.get_publish_services(plugin_id) or []
    if not publish_services:
        logger.info('ConvertAllPhotos: No publish services found, done.')
        return summary

    published_collections = []
    for publish_service in publish_services:
        published_collections.extend(get_all_published_collections(publish_service))
    summary.collections = len(published_collections)
    logger.info('ConvertAllPhotos: Found {} published collections in {} publish services',
                len(published_collections), len(publish_services))
    if not published_collections:
        return summary

    start_time = time.time()
    with progress_factory('Photo StatLr: Converting all collections') as progress:
        for idx, published_collection in enumerate(published_collections, 1):
            if progress.is_canceled():
                break
            summary.add(convert_collection(catalog, published_collection, progress_factory))
            progress.set_portion_complete(idx, len(published_collections))
    summary.elapsed = time.time() - start_time

    logger.info('ConvertAllPhotos: done. {}', summary.message)
    return summary
