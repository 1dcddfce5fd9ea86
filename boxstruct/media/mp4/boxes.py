'''
# User data and metadata

The user data box ('udta') is a container for information about a
presentation or a track; with iTunes-like files its only interesting child
is the metadata box ('meta'), a full box which in turn carries a handler
reference box ('hdlr') telling how to interpret its other children (the item
list 'ilst' and friends, kept opaque here).

    udta
     `- meta
         |- hdlr
         `- ilst (opaque)
'''
from ... import fields
from .box import ContainerBox, FullBox
from .constants import HEADER_SIZE, MAX_DEPTH
from .enum import BoxType
from .fields import BoxField, FourCCField


class HdlrBox(FullBox):
    '''The name is a NUL terminated UTF-8 string filling what remains of the box.'''
    box_type = BoxType.HDLR

    pre_defined  = fields.StructField('I')
    handler_type = FourCCField()
    reserved     = fields.StringField(12)
    handler_name = fields.CStringField()

    def unpack_box(self, stream, size, depth=0, max_depth=MAX_DEPTH):
        fixed_size = HEADER_SIZE + sum(field.size for name, field in self.get_fields() if name != 'handler_name')

        self.check_fixed_size(size, fixed_size)

        self.handler_name.length = size - fixed_size

        super().unpack_box(stream, size, depth=depth, max_depth=max_depth)

    def summary(self):
        return 'handler_type=%s name=%s' % (self.handler_type, self.handler_name.value)


class MetaBox(FullBox, ContainerBox):
    box_type = BoxType.META

    hdlr = BoxField(HdlrBox)


class UdtaBox(ContainerBox):
    box_type = BoxType.UDTA

    meta = BoxField(MetaBox)


BOX_CLASSES = {_.box_type: _ for _ in (UdtaBox, MetaBox, HdlrBox)}
