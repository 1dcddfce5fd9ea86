'''
Media container formats.
'''
