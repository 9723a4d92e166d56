"""
Boot code for the picture disk.

Track 0 carries a two-stage loader. The first stage in sector 0 is read
by the Disk II boot ROM; it reads the rest of track 0 into memory, then
jumps to the second stage in sector 15, which copies the packed picture
onto the hi-res screen and prints the display message.
"""

# Offset of the display message inside the second-stage sector
DISPLAY_MESSAGE_OFFSET = 177
MAX_MESSAGE_LENGTH = 40

# Stage 1: loaded at $0800 by the boot ROM
BOOT_1_SECTOR_0 = bytes((
    0x01, 0xA5, 0x27, 0xC9, 0x09, 0xD0, 0x18, 0xA5, 0x2B, 0x4A, 0x4A, 0x4A, 0x4A, 0x09, 0xC0, 0x85,
    0x3F, 0xA9, 0x5C, 0x85, 0x3E, 0x18, 0xAD, 0x5C, 0x08, 0x6D, 0x5D, 0x08, 0x8D, 0x5C, 0x08, 0xAE,
    0x5D, 0x08, 0x30, 0x15, 0xBD, 0x4B, 0x08, 0x85, 0x5D, 0xCE, 0x5D, 0x08, 0xAD, 0x5C, 0x08, 0x85,
    0x27, 0xCE, 0x5C, 0x08, 0xA6, 0x2B, 0x6C, 0x3E, 0x00, 0xEE, 0x5C, 0x08, 0xEE, 0x5C, 0x08, 0x20,
    0x89, 0xFE, 0x20, 0x93, 0xFE, 0x20, 0x2F, 0xFB, 0x4C, 0x00, 0xB0, 0x00, 0x0D, 0x0B, 0x09, 0x07,
    0x05, 0x03, 0x01, 0x0E, 0x0C, 0x0A, 0x08, 0x06, 0x04, 0x02, 0x0F, 0x00, 0xB0, 0x0E, 0xB0, 0x0E,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x54, 0x68, 0x69, 0x73, 0x20, 0x69, 0x73, 0x20, 0x61, 0x20, 0x50, 0x69, 0x63, 0x74, 0x75, 0x72,
    0x65, 0x44, 0x53, 0x4B, 0x20, 0x28, 0x74, 0x6D, 0x29, 0x20, 0x21, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x43, 0x6F, 0x70, 0x79, 0x72, 0x69, 0x67, 0x68, 0x74, 0x20, 0x28, 0x63, 0x29, 0x20, 0x42, 0x65,
    0x6E, 0x20, 0x5A, 0x6F, 0x74, 0x74, 0x6F, 0x20, 0x32, 0x30, 0x32, 0x31, 0x00, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00
))

# Stage 2: loaded at $B000, shows the picture and the message
BOOT_2_SECTOR_F = bytes((
    0xA2, 0x60, 0xBD, 0x88, 0xC0, 0xA2, 0x50, 0xBD, 0x88, 0xC0, 0xA9, 0x17, 0x85, 0x25, 0x20, 0xE2,
    0xF3, 0xA2, 0x07, 0x20, 0xF0, 0xF6, 0x20, 0x57, 0xF4, 0x20, 0xF6, 0xF3, 0xA9, 0xB1, 0x85, 0x09,
    0xA9, 0x00, 0x85, 0x08, 0x85, 0xFB, 0xAE, 0x52, 0xB0, 0x20, 0x53, 0xB0, 0xA0, 0x09, 0x84, 0xFA,
    0xA4, 0xFB, 0xB1, 0x08, 0xC8, 0xD0, 0x03, 0xEE, 0x09, 0x00, 0x84, 0xFB, 0xA4, 0xFA, 0x91, 0x06,
    0xC8, 0xC0, 0x1E, 0xD0, 0xE9, 0xEE, 0x52, 0xB0, 0xA0, 0x99, 0xCC, 0x52, 0xB0, 0xF0, 0x4E, 0x4C,
    0x26, 0xB0, 0x06, 0x8A, 0x4A, 0x4A, 0x4A, 0x18, 0x0A, 0xA8, 0xB9, 0x75, 0xB0, 0x48, 0xC8, 0xB9,
    0x75, 0xB0, 0x48, 0x8A, 0x29, 0x07, 0x18, 0x0A, 0x0A, 0x85, 0x07, 0x68, 0x18, 0x65, 0x07, 0x85,
    0x07, 0x68, 0x85, 0x06, 0x60, 0x00, 0x20, 0x80, 0x20, 0x00, 0x21, 0x80, 0x21, 0x00, 0x22, 0x80,
    0x22, 0x00, 0x23, 0x80, 0x23, 0x28, 0x20, 0xA8, 0x20, 0x28, 0x21, 0xA8, 0x21, 0x28, 0x22, 0xA8,
    0x22, 0x28, 0x23, 0xA8, 0x23, 0x50, 0x20, 0xD0, 0x20, 0x50, 0x21, 0xD0, 0x21, 0xA2, 0x00, 0xBD,
    0xB0, 0xB0, 0xF0, 0x09, 0x09, 0x80, 0x20, 0xF0, 0xFD, 0xE8, 0x4C, 0x9F, 0xB0, 0x4C, 0xAD, 0xB0,
    0x0A, 0x46, 0x4C, 0x55, 0x58, 0x2D, 0x49, 0x4D, 0x41, 0x47, 0x45, 0x20, 0x54, 0x48, 0x49, 0x53,
    0x20, 0x44, 0x49, 0x53, 0x4B, 0x20, 0x46, 0x4F, 0x52, 0x20, 0x41, 0x20, 0x53, 0x55, 0x52, 0x50,
    0x52, 0x49, 0x53, 0x45, 0x0D, 0x3D, 0x29, 0x0D, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x42, 0x5A
))
